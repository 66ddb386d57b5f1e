from setuptools import find_packages, setup

setup(
    name="crysym",
    version="0.1.0",
    description="Crystallographic symmetry operations, Hall symbols and space group settings",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"crysym": ["sgdata.json"]},
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "crysym-sg=crysym.cmd.sg:main",
        ],
    },
)
