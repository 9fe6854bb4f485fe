"""
MicroPause NLP Integration Package
==================================
Version: 1.0.0

Integrations with external language services:
- LanguageTool: remote grammar, punctuation and style checking

Uses lazy loading - modules only import when accessed.
"""

__version__ = "1.0.0"

# Lazy loading implementation
# Modules are only imported when first accessed

_MODULES = {
    'languagetool': 'nlp.languagetool',
}

_loaded_modules = {}


def __getattr__(name):
    """Lazy load submodules on first access."""
    if name in _MODULES:
        if name not in _loaded_modules:
            import importlib
            try:
                _loaded_modules[name] = importlib.import_module(_MODULES[name])
            except ImportError as e:
                raise ImportError(
                    f"NLP module '{name}' not available. "
                    f"Install dependencies with: pip install -e ."
                ) from e
        return _loaded_modules[name]
    raise AttributeError(f"module 'nlp' has no attribute '{name}'")


def __dir__():
    """List available submodules."""
    return list(_MODULES.keys()) + ['config', 'base', 'get_status']


def get_status():
    """
    Get status of all NLP integrations.

    Returns dict with enabled flag and version info for each module.
    """
    from . import config
    status = {
        'version': __version__,
        'modules': {}
    }

    for name in _MODULES:
        module_status = {
            'enabled': config.is_enabled(name),
            'available': False,
            'version': None,
            'error': None
        }

        if config.is_enabled(name):
            try:
                mod = __getattr__(name)
                module_status['available'] = True
                module_status['version'] = getattr(mod, '__version__', 'unknown')
            except ImportError as e:
                module_status['error'] = str(e)

        status['modules'][name] = module_status

    return status
