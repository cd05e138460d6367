"""Setup raml_path_match."""

from setuptools import find_packages, setup

with open("README.md") as f:
    readme = f.read()


inst_reqs = ["anyio"]
extra_reqs = {"test": ["pytest", "pytest-cov"]}


setup(
    name="raml-path-match",
    version="1.0.0",
    description="Match request paths against RAML URI templates",
    long_description=readme,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="RAML URI-Template Path Routing",
    packages=find_packages(exclude=["ez_setup", "examples", "tests"]),
    include_package_data=True,
    zip_safe=False,
    install_requires=inst_reqs,
    extras_require=extra_reqs,
)
