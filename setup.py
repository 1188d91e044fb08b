from setuptools import find_packages, setup

"""
# Usage instructions
#
# To install the package
#   'pip install .'
#
# To install with test dependencies
#   'pip install -e .[test]'
"""

INSTALL_REQUIRES = [
    "aiohttp>=3.9",
    "msgspec>=0.18",
    "picows>=1.0",
    "tomli-w>=1.0",
]

TEST_REQUIRES = [
    "pytest>=8.0",
    "pytest-asyncio>=0.23",
]


setup(
    name="candle_watch",
    version="0.1.0",
    description="Reports Coinbase Advanced Trade candles as they complete",
    python_requires=">=3.11",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=INSTALL_REQUIRES,
    extras_require={"test": TEST_REQUIRES},
    entry_points={
        "console_scripts": [
            "candle-watch=candle_watch.__main__:main",
        ]
    },
)
