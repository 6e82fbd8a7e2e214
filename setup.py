import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()


setuptools.setup(
    name="HDBabyJub",
    version="0.1.0",
    description="BIP32-style hierarchical deterministic derivation of Baby Jubjub keys",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(where=".", exclude=["tests", "tests.*"]),
    package_data={"HDBabyJub": ["py.typed"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.6",
    install_requires=[
        "mnemonic>=0.19",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "hdbabyjub=HDBabyJub.__main__:main",
        ],
    },
)
