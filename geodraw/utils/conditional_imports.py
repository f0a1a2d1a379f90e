"""
Intercepts import errors concerning optional imports to either:
    - Provide a more detailed error response or
    - Auto-download the specified package
"""

__all__ = ['ConditionalPackageInterceptor']

from importlib import util
import subprocess
import sys
from typing import Union

from geodraw.utils.logging import LOGGER


class ConditionalPackageInterceptor:
    """
    Import hook for geodraw's optional dependencies (e.g. pyproj, used by
    geodraw.projection.TransformerProjector). Only packages registered with
    .permit_packages() are handled; everything else falls through to the usual
    ModuleNotFoundError.

    To use:
        In your code's entrypoint, add the following code:

            ConditionalPackageInterceptor.permit_packages(
                <list or dict of packages>
            )
            sys.meta_path.append(ConditionalPackageInterceptor)

    geodraw's own __init__.py already does this for its optional extras. The
    interceptor must be appended to sys.meta_path (not prepended) so that it is
    consulted only after every real finder has failed.
    """

    PERMITTED_PACKAGES: dict = {}
    AUTO_DOWNLOAD = False

    @classmethod
    def permit_packages(cls, packages: Union[list, dict]) -> None:
        """
        Adds python packages to the list of packages that are permitted to be automatically
        installed.

        The import name of a package is not always its name on the package index, so
        packages may be registered in two ways:
            As a list: packages will be pip installed exactly as listed
                ["pyproj"]
                "import pyproj" -> pip install pyproj

            As a dict: packages will be pip installed by the corresponding value
                {"pyproj": "geodraw[proj]"}
                "import pyproj" -> pip install geodraw[proj]

        Args:
            packages (Union[list, dict]): The packages that will be allowed to auto-install if
                                          missing

        Returns:
            None
        """
        if isinstance(packages, list):
            cls.PERMITTED_PACKAGES.update({item: item for item in packages})
        elif isinstance(packages, dict):
            cls.PERMITTED_PACKAGES.update(packages)
        else:
            raise TypeError(
                f"Permitted packages must be submitted as a list or dict, not {type(packages)}"
            )

    @classmethod
    def permit_auto_download(cls, option: bool) -> None:
        """
        Defines whether packages may be auto-downloaded or not. Default False.
        """
        cls.AUTO_DOWNLOAD = option

    @classmethod
    def find_spec(  # pylint: disable=unused-argument, inconsistent-return-statements
            cls, name, path, target=None
    ):
        """
        Called by importlib after every other finder on sys.meta_path failed to locate
        `name`. Returns None for packages that were never permitted, installs the package
        when auto-download is enabled, and otherwise raises a ModuleNotFoundError that
        names the extra to install.

        Args:
            name (str): The name of the package
            path:
            target:

        Returns:
            A module spec for the freshly installed package, or None
        """
        if name not in cls.PERMITTED_PACKAGES:
            return

        if cls.AUTO_DOWNLOAD:
            LOGGER.warning("Module %r not installed. Attempting to pip install...", name)
            try:
                subprocess.run(
                    [sys.executable, '-m', 'pip', 'install', cls.PERMITTED_PACKAGES[name]],
                    check=True
                )
            except subprocess.CalledProcessError:
                return None

            return util.find_spec(name)

        raise ModuleNotFoundError(
            f"You are attempting to use a module which requires an optional installation ({name}). "
            "Please choose one of the following options to continue: \n\n "
            "1) Enable package auto-installation using: \n"
            "    from geodraw.utils.conditional_imports import ConditionalPackageInterceptor \n"
            "    ConditionalPackageInterceptor.permit_auto_download(True) \n\n"
            "2) Pip install the package yourself using the following command: \n"
            f"    pip install {cls.PERMITTED_PACKAGES[name]}"
        )
