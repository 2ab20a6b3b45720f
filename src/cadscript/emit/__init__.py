"""
Emission of parsed commands as target source text.

Exports:
- EmissionRegistry, CommandSchema, ParamSpec: schema table and lookup
- get_default_registry: registry of the built-in command schemas
- render: render commands with a registry
- render_document: header + rendered commands + footer
"""

from .registry import (
    ParamSpec,
    CommandSchema,
    EmissionRegistry,
    coerce,
    resolve_parameter,
    get_default_registry,
    render,
)

from .template import (
    TemplateValue,
    template,
    template_value,
)

from .document import (
    DEFAULT_HEADER,
    DEFAULT_FOOTER,
    document_header,
    document_footer,
    render_document,
)

__all__ = [
    'ParamSpec',
    'CommandSchema',
    'EmissionRegistry',
    'coerce',
    'resolve_parameter',
    'get_default_registry',
    'render',
    'TemplateValue',
    'template',
    'template_value',
    'DEFAULT_HEADER',
    'DEFAULT_FOOTER',
    'document_header',
    'document_footer',
    'render_document',
]
