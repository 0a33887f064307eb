# setup.py
from setuptools import setup, find_packages

setup(
    name="keikaku",
    version="0.1.0",
    description="A small Lisp: span-tracking reader and tree-walking evaluator",
    packages=find_packages(include=["keikaku", "keikaku.*", "keikaku_lsp", "keikaku_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "keikaku=keikaku.cli:main",
            "keikaku-ls=keikaku_lsp.server:main",
        ],
    },
    zip_safe=False,
)
