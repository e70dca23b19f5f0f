from setuptools import setup, find_packages

setup(
    name="fracmat",
    version="1.0",
    description="Generic exact fractions and fixed-dimension square matrices",
    long_description=("Generic exact fractions and fixed-dimension square matrices that nest into each other "
                      "(fractions of fractions, matrices of fractions) while keeping the operator contracts of "
                      "plain numbers"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["numpy"],
    extras_require={"test": ["pytest", "pytest-timeout", "sympy"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["fraction", "rational", "matrix", "determinant", "exact arithmetic"],
    zip_safe=False,
)
