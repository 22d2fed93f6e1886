"""Operation auto-discovery and registration.

Every public module under picture_kit/operations/ that defines an `operation`
object of type Operation is registered under that operation's name. The
defining module is remembered so its docstring can serve as help text.
"""

import importlib
import pkgutil
from collections.abc import Iterator
from types import ModuleType

import picture_kit.operations
from picture_kit.core.types import Operation

_operations: dict[str, Operation] = {}
_modules: dict[str, ModuleType] = {}


def _operation_modules() -> Iterator[ModuleType]:
    package = picture_kit.operations
    for info in pkgutil.iter_modules(package.__path__, prefix=f'{package.__name__}.'):
        if not info.name.rpartition('.')[2].startswith('_'):
            yield importlib.import_module(info.name)


def discover() -> dict[str, Operation]:
    """Import all operation modules once and return the registry."""
    if not _operations:
        for module in _operation_modules():
            op = getattr(module, 'operation', None)
            if isinstance(op, Operation):
                _operations[op.name] = op
                _modules[op.name] = module
    return _operations


def get(name: str) -> Operation:
    try:
        return discover()[name]
    except KeyError:
        available = ', '.join(sorted(_operations))
        raise KeyError(f'Unknown operation: {name}. Available: {available}') from None


def all_operations() -> dict[str, Operation]:
    return discover()


def module_doc(name: str) -> str:
    """Docstring of the module that defines operation `name`, stripped."""
    get(name)
    return (_modules[name].__doc__ or '').strip()
