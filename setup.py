import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("CHANGELOG.md", "r") as fh:
    long_description += fh.read()

setuptools.setup(
    name="simqueue",
    version="0.1.0",
    author="Jason Liu",
    author_email="jasonxliu2010@gmail.com",
    description="An Event-Driven M/M/1 Queue Simulator in Python",
    license='MIT',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "examples"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.6',
)
