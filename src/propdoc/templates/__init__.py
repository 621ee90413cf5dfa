"""Built-in brochure templates and the registry that resolves them."""

from propdoc.templates.registry import TemplateRegistry, builtin_templates, default_registry

__all__ = ["TemplateRegistry", "builtin_templates", "default_registry"]
