from setuptools import setup

setup(
    name="mpfloat",
    version="0.3.0",  # Match mpfloat.__version__
    description="Correctly rounded arbitrary-precision floating point values backed by MPFR",
    install_requires=["gmpy2>=2.2"],
    extras_require={
        "test": ["pytest>=7"],
        "examples": ["numpy"],
    },
    package_data={"mpfloat": ["py.typed"]},
    packages=["mpfloat"],
    zip_safe=False,
    python_requires=">=3.8",
)
