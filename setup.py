from setuptools import setup, find_packages

setup(
    name="gateway-sdk",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.31.0",
        "pynacl>=1.5.0",
        "typing-extensions>=4.0.0",
        "solders>=0.21.0",
        "base58>=2.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
