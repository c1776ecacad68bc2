"""
openkore_lsp - OpenKore Config Language Server

Analysis back end for editor support of OpenKore configuration files:
config.txt, items_control.txt and mon_control.txt.
"""

__version__ = "0.1.0"
__author__ = "openkore-lsp contributors"

from openkore_lsp.grammar import GrammarRegistry, load_grammar
from openkore_lsp.validators import validate_document
