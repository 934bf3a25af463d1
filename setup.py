# setup.py
from setuptools import setup, find_packages

setup(
    name="sharplisp",
    version="0.1.0",
    description="A small Lisp with #(...) closures: lexer, parser, tree-walking evaluator and language server",
    packages=find_packages(include=["sharplisp", "sharplisp.*", "sharplisp_lsp", "sharplisp_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.3,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "sharplisp-ls=sharplisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
