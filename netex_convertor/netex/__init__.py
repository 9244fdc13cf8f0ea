"""NeTEx period-ticket document generation.

- template: loads the document skeleton into an immutable tree
- resolvers: compute frame content from a ticket and operator record
- assembler: runs the frame pipeline over the skeleton
- serializer: renders the populated tree as XML text
"""

from .assembler import NetexGenerator, generate_netex_tree
from .serializer import serialize
from .template import TemplateLoader, load_template, parse_template
from .tree import Node

__all__ = [
    "Node",
    "NetexGenerator",
    "TemplateLoader",
    "generate_netex_tree",
    "load_template",
    "parse_template",
    "serialize",
]
