# Core type aliases for keikaku's data model.
# Source forms and runtime values are plain Python values (int, list, Symbol)
# plus a few small marker types; there is no Cons type.
#
# Naming guidance:
# - SExpression: use in reader/parser code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`.

from typing import Any

# Runtime value alias
LispValue = Any
# Syntactic form alias (int | Symbol | DefType | list[Located])
SExpression = Any

__version__ = "0.1.0"
