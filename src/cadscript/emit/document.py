"""
Complete output documents: header, command blocks, footer.

The default header and footer wrap the blocks in an AutoCAD .NET command
class whose single command method opens a transaction on the model space.
"""

from typing import Iterable, Optional

from ..command import Command
from ..config import Config, DEFAULT_CONFIG
from ..errors import DiagnosticCollector
from .registry import EmissionRegistry, get_default_registry

DEFAULT_HEADER = """\
using Autodesk.AutoCAD.ApplicationServices;
using Autodesk.AutoCAD.DatabaseServices;
using Autodesk.AutoCAD.EditorInput;
using Autodesk.AutoCAD.Geometry;
using Autodesk.AutoCAD.Runtime;
using Autodesk.AutoCAD.Colors;

namespace {namespace}
{{
    public class {class_name}
    {{
        [CommandMethod("{command_method}")]
        public void RunGenerated()
        {{
            Document doc = Application.DocumentManager.MdiActiveDocument;
            Database db = doc.Database;
            Editor ed = doc.Editor;

            using (Transaction tr = db.TransactionManager.StartTransaction())
            {{
                BlockTable bt = (BlockTable)tr.GetObject(db.BlockTableId, OpenMode.ForRead);
                BlockTableRecord btr = (BlockTableRecord)tr.GetObject(bt[BlockTableRecord.ModelSpace], OpenMode.ForWrite);

"""

DEFAULT_FOOTER = """\
                tr.Commit();
            }
        }
    }
}
"""


def document_header(config: Config = DEFAULT_CONFIG) -> str:
    if config.header is not None:
        return config.header
    return DEFAULT_HEADER.format(
        namespace=config.namespace,
        class_name=config.class_name,
        command_method=config.command_method,
    )


def document_footer(config: Config = DEFAULT_CONFIG) -> str:
    if config.footer is not None:
        return config.footer
    return DEFAULT_FOOTER


def render_document(commands: Iterable[Command],
                    registry: Optional[EmissionRegistry] = None,
                    config: Config = DEFAULT_CONFIG,
                    diagnostics: Optional[DiagnosticCollector] = None) -> str:
    """Render commands between the configured header and footer."""
    registry = registry if registry is not None else get_default_registry()
    body = registry.render_all(commands, diagnostics, indent=config.indent)
    return document_header(config) + body + document_footer(config)
