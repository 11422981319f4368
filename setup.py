import setuptools

import pythontk as ptk


__package__ = "shapemenu"
__version__ = ptk.get_text_between_delimiters(
    ptk.get_file_contents(f"{__package__}/__init__.py"),
    '__version__ = "',
    '"',
    as_string=True,
)

long_description = ptk.get_file_contents("docs/README.md")
description = ptk.get_text_between_delimiters(
    long_description,
    "<!-- short_description_start -->",
    "<!-- short_description_end -->",
    as_string=True,
)

setuptools.setup(
    name=__package__,
    version=__version__,
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["test", "test.*"]),  # the package and its examples.
    python_requires=">=3.8",
    install_requires=["qtpy", "PySide6", "pythontk"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

# --------------------------------------------------------------------------------------------


# --------------------------------------------------------------------------------------------
# Notes
# --------------------------------------------------------------------------------------------
