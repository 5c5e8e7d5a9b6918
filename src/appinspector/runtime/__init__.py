"""Target application bootstrap and object loading."""

from appinspector.runtime.bootstrap import Runtime, bootstrap, locate_app_root
from appinspector.runtime.loader import import_object

__all__ = ["Runtime", "bootstrap", "import_object", "locate_app_root"]
