from setuptools import setup, find_packages


setup(
    name="rgssad",
    version="0.1",
    packages=find_packages(include=["rgssad", "rgssad.*"]),
    description="Decrypt and extract RPG Maker XP/VX/VX Ace RGSSAD archives.",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "rgssad=rgssad.cli:main",
        ]
    },
)
