# setup.py
from setuptools import find_packages, setup

setup(
    name="armcosts",
    version="0.1.0",
    description="Monthly cost estimates for Azure ARM what-if changes.",
    packages=find_packages(include=["armcosts", "armcosts.*"]),
    include_package_data=True,
    package_data={"armcosts": ["data/*.json"]},
    python_requires=">=3.8",
    install_requires=["click", "requests", "rich", "python-dotenv"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "armcosts=armcosts.main:main",
        ]
    },
)
