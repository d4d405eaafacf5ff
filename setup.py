# setup.py
from setuptools import setup, find_packages

setup(
    name="quill",
    version="0.1.0",
    description="A small expression language: function definitions, arithmetic, and a two-tier numeric tower",
    packages=find_packages(include=["quill", "quill.*", "quill_lsp", "quill_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "hypothesis>=6",
        ],
    },
    entry_points={
        "console_scripts": [
            "quill=quill.__main__:main",
            "quill-ls=quill_lsp.server:main",
        ],
    },
    zip_safe=False,
)
