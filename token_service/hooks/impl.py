"""Hook Implementations collected from the :mod:`token_service.services` sub-package.

Dynamically imports the `blueprints` module of each service package found in
:mod:`token_service.services`. Functions decorated with
:class:`HookimplMarker("token_service")` in these modules are registered with
the plugin manager.

Services without a `blueprints` module are skipped.
"""
import importlib
import logging
import pkgutil
from types import ModuleType
from typing import List

from token_service import services as services_subpackage


def load_hook_modules() -> List[ModuleType]:
    modules = []
    for sub_module in pkgutil.iter_modules(path=services_subpackage.__path__):
        _, sub_module_name, _ = sub_module

        if sub_module_name.startswith(("_", "utils")):
            continue

        service_pkg_path = f"{services_subpackage.__name__}.{sub_module_name}"
        blueprints_module_path = f"{service_pkg_path}.blueprints"

        try:
            modules.append(importlib.import_module(blueprints_module_path))
        except ModuleNotFoundError as e:
            if e.name != blueprints_module_path:
                raise
            logging.error(f"skipped {sub_module_name} service - no blueprints module found!")
        else:
            logging.info(f"Loaded blueprints for {service_pkg_path} service..")
    return modules
