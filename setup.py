"""A setuptools based setup module.
See:
https://packaging.python.org/guides/distributing-packages-using-setuptools/
https://github.com/pypa/sampleproject
"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages

setup(
    name="arns",
    version="0.1.0",
    description="Parser for the resource section of AWS ARNs",
    long_description="Splits the resource section of an ARN into resource type, resource and qualifier.",
    long_description_content_type="text/plain",
    classifiers=[  # Optional
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3 :: Only",
    ],
    package_dir={"": "src"},  # Optional
    packages=find_packages(where="src"),  # Required
    python_requires=">=3.8, <4",
    install_requires=[
        "pyyaml>=5.3.1",
        "jq>=1.4.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={  # Optional
        "console_scripts": [
            "arns=arns:main",
        ],
    },
)
