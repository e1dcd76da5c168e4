from setuptools import setup, find_packages

setup(
    name="proxy-conf",
    version="0.3.0",
    packages=find_packages(include=["proxy_conf", "proxy_conf.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "rich",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "proxy-conf=proxy_conf.cli:main",
        ],
    },
)
