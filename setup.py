import os
from pathlib import Path

from setuptools import setup

# read the version info without importing the package (and therefore its dependencies)
about = {}
exec(Path("sqsinspect", "__version__.py").read_text(encoding="utf-8"), about)

readme_file_path = os.path.join("readme.md")

with open(readme_file_path, encoding="utf-8") as f:
    long_description = "\n" + f.read()

setup(
    name=about["__title__"],
    description=about["__description__"],
    long_description=long_description,
    long_description_content_type="text/markdown",
    version=about["__version__"],
    author=about["__author__"],
    author_email=about["__author_email__"],
    license="MIT License",
    url=about["__url__"],
    download_url=about["__download_url__"],
    keywords=["aws", "cloud", "sqs", "queue", "inspect"],
    packages=[about["__title__"]],
    python_requires=">=3.9",
    install_requires=["boto3", "typeguard", "balsa", "tobool", "ismain"],
    extras_require={"test": ["pytest", "moto[sqs]"]},
    entry_points={"console_scripts": ["sqsinspect = sqsinspect.cli:main"]},
    classifiers=[],
)
