# setup.py
import datetime
import os
import platform

from setuptools import setup, find_namespace_packages
from setuptools.command.build_py import build_py

BUILD_STAMP_TEMPLATE = '''"""Generated at build time. Do not edit."""

BUILD_TIME = {build_time!r}
BUILDER_OS = {builder_os!r}
BUILDER_ARCH = {builder_arch!r}
'''


class BuildPyWithStamp(build_py):
    """Write guext/_build_info.py with the build time and builder platform."""

    def run(self):
        super().run()
        if self.dry_run:
            return

        target = os.path.join(self.build_lib, "guext", "_build_info.py")
        self.mkpath(os.path.dirname(target))
        with open(target, "w", encoding="utf-8") as f:
            f.write(BUILD_STAMP_TEMPLATE.format(
                build_time=datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
                builder_os=platform.system().lower(),
                builder_arch=platform.machine().lower(),
            ))
        print(f"[*] Build stamp written to {target}")


setup(
    name="guext",
    version="1.0.0",
    description="Extract C# using directives into per-project GlobalUsings.cs files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["guext", "guext.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    cmdclass={"build_py": BuildPyWithStamp},
    entry_points={
        'console_scripts': [
            'guext=guext.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
