import importlib
import logging
from pathlib import Path

from marquee.types.module import Module

marquee_error_logger = logging.getLogger("marquee.error")

PACKAGE_ROOT = Path(__file__).parent

module_list: list[Module] = []
core_module_list: list[Module] = []
all_modules: list[Module] = []

for endpoints_file in sorted(PACKAGE_ROOT.glob("modules/*/endpoints_*.py")):
    endpoint_module = importlib.import_module(
        ".".join(
            (PACKAGE_ROOT.name, *endpoints_file.relative_to(PACKAGE_ROOT).with_suffix("").parts),
        ),
    )
    if hasattr(endpoint_module, "module"):
        module: Module = endpoint_module.module
        module_list.append(module)
    else:
        marquee_error_logger.error(
            f"Module {endpoints_file} does not declare a module. It won't be enabled.",
        )


for endpoints_file in sorted(PACKAGE_ROOT.glob("core/*/endpoints_*.py")):
    endpoint_module = importlib.import_module(
        ".".join(
            (PACKAGE_ROOT.name, *endpoints_file.relative_to(PACKAGE_ROOT).with_suffix("").parts),
        ),
    )
    if hasattr(endpoint_module, "core_module"):
        core_module: Module = endpoint_module.core_module
        core_module_list.append(core_module)
    else:
        marquee_error_logger.error(
            f"Core module {endpoints_file} does not declare a core module. It won't be enabled.",
        )

all_modules = module_list + core_module_list
