from setuptools import setup, find_packages

if __name__ == "__main__":
    setup(
        name="zenodo-publish",
        version="0.1.0",
        package_dir={"": "src"},
        packages=find_packages("src"),
        python_requires=">=3.9",
        install_requires=[
            "requests",
            "PyYAML",
        ],
        extras_require={
            "test": ["pytest", "responses"],
        },
        entry_points={
            "console_scripts": [
                "zenodo-publish=zenodo_publish.main:main",
            ],
        },
    )
