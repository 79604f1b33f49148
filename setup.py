import os

from setuptools import find_packages, setup  # isort: skip


HERE = os.path.dirname(os.path.abspath(__file__))


def get_version():
    with open(os.path.join(HERE, "diagtrace", "__init__.py")) as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"')
    raise RuntimeError("unable to find the diagtrace version")


setup(
    name="diagtrace",
    version=get_version(),
    description="Turn in-process diagnostic events into OpenTracing spans",
    packages=find_packages(exclude=["tests*"]),
    python_requires=">=3.7",
    zip_safe=False,
    install_requires=[
        "attrs>=20",
        "envier~=0.5",
        "opentracing>=2.4,<3",
        "wrapt>=1",
    ],
    extras_require={
        "requests": ["requests>=2.20"],
        "test": ["pytest>=6", "requests>=2.20"],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
    ],
)
