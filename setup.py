from setuptools import setup, find_packages

long_description = "cgroupmon"

requirements = []
with open("requirements.txt", "r") as fh:
    requirements = fh.readlines()


setup(
    name="cgroupmon",
    version="1.0.0",
    author="Rogerio Alves",
    author_email="rogerioalves.ee@gmail.com",
    description="Resource usage of the current Slurm job from cgroup v1",
    long_description=long_description,
    install_requires=requirements,
    extras_require={"test": ["pytest", "pytest-mock"]},
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["cli"],
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Operating System :: POSIX :: Linux",
    ],
    entry_points="""
        [console_scripts]
        cgroupmon=cli:main
    """,
)
