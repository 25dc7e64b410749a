from setuptools import setup, find_packages

setup(
    name="pydescent",
    version="0.1.0",
    packages=find_packages(),
    install_requires=["numpy", "scipy", "matplotlib"],
    extras_require={"test": ["pytest"]},
    author="Your Name",
    description="Gradient descent with an Armijo backtracking line search on dense matrices",
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License"
    ]
)
