from .dispatch import PathDispatcher, install_dispatcher

__all__ = ["PathDispatcher", "install_dispatcher"]
