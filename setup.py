# pylint: disable=missing-module-docstring
import setuptools

with open("README.md", 'r') as description:
    long_description = description.read()

with open("requirements.txt", 'r') as dependencies:
    requirements = [pkg.strip() for pkg in dependencies if pkg.strip()]

with open("version.txt", 'r') as version_info:
    version_tag, version = [v.strip() for v in version_info]

setuptools.setup(
    name="Tessera",
    version=version,
    license="GPLv3",
    description=(
        "Poisson-disc sampling and inverse distance weighting "
        "for tileable noise."
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=[
        'tessera',
        'tessera.algorithms',
        'tessera.synthesis',
        'tessera.tests',
    ],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.6',
)
