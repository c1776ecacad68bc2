"""
OpenKore config language server.

Binds the analysis functions to LSP requests through pygls. The server is
built around one Session; handlers read document snapshots from it and
publish the full diagnostic list on every open and change.
"""

import logging
from typing import Callable, List, Optional

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from openkore_lsp import __version__
from openkore_lsp import features
from openkore_lsp.session import Session
from openkore_lsp.symbols import document_symbols

logger = logging.getLogger(__name__)

SERVER_NAME = "openkore-lsp"

Publisher = Callable[[str, List[lsp.Diagnostic]], None]


def apply_log_level(raw: Optional[str]) -> None:
    """Set the root logger level from a string like 'debug', 'warning', etc."""
    if not raw:
        return
    level = getattr(logging, str(raw).upper(), None)
    if isinstance(level, int):
        logging.getLogger().setLevel(level)


class OpenKoreHandlers:
    """
    LSP request handlers over one session.

    Each handler is synchronous and runs to completion. A request for a
    document that is not open gets an empty or null result.
    """

    def __init__(self, session: Session, publish: Publisher):
        self.session = session
        self.publish = publish

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, params: lsp.InitializeParams) -> None:
        opts = params.initialization_options
        raw_level = opts.get("logLevel") if isinstance(opts, dict) else getattr(opts, "logLevel", None)
        apply_log_level(raw_level)
        client = params.client_info.name if params.client_info else "unknown client"
        logger.info("Initialized for %s with %r", client, self.session.registry)

    # ------------------------------------------------------------------
    # Text document synchronisation
    # ------------------------------------------------------------------

    def publish_diagnostics(self, uri: str) -> None:
        diagnostics = [d.to_lsp() for d in self.session.diagnostics(uri)]
        logger.debug("Publishing %d diagnostics for %s", len(diagnostics), uri)
        self.publish(uri, diagnostics)

    def did_open(self, params: lsp.DidOpenTextDocumentParams) -> None:
        td = params.text_document
        self.session.open(td.uri, td.text, td.version)
        self.publish_diagnostics(td.uri)

    def did_change(self, params: lsp.DidChangeTextDocumentParams) -> None:
        if not params.content_changes:
            return
        uri = params.text_document.uri
        # Full sync: the last change carries the whole document
        text = params.content_changes[-1].text
        self.session.update(uri, text, params.text_document.version)
        self.publish_diagnostics(uri)

    def did_close(self, params: lsp.DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        self.session.close(uri)
        self.publish(uri, [])

    def pull_diagnostics(self, params: lsp.DocumentDiagnosticParams) -> lsp.RelatedFullDocumentDiagnosticReport:
        uri = params.text_document.uri
        return lsp.RelatedFullDocumentDiagnosticReport(
            items=[d.to_lsp() for d in self.session.diagnostics(uri)],
        )

    # ------------------------------------------------------------------
    # Position requests
    # ------------------------------------------------------------------

    def completion(self, params: lsp.CompletionParams) -> List[lsp.CompletionItem]:
        document = self.session.get(params.text_document.uri)
        if document is None:
            return []
        return features.complete(self.session.registry, document.lines, params.position)

    def completion_resolve(self, item: lsp.CompletionItem) -> lsp.CompletionItem:
        return features.resolve_completion(self.session.registry, item)

    def hover(self, params: lsp.HoverParams) -> Optional[lsp.Hover]:
        document = self.session.get(params.text_document.uri)
        if document is None:
            return None
        return features.hover(self.session.registry, document.lines, params.position)

    def definition(self, params: lsp.DefinitionParams) -> Optional[List[lsp.LocationLink]]:
        document = self.session.get(params.text_document.uri)
        if document is None:
            return None
        return features.definition(self.session.registry, document.uri, document.lines, params.position)

    def document_symbol(self, params: lsp.DocumentSymbolParams) -> List[lsp.SymbolInformation]:
        document = self.session.get(params.text_document.uri)
        if document is None:
            return []
        return document_symbols(document.uri, document.text)


def create_server(session: Session) -> LanguageServer:
    """Build a language server bound to session."""
    server = LanguageServer(
        SERVER_NAME, __version__,
        text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
    )

    def publish(uri: str, diagnostics: List[lsp.Diagnostic]) -> None:
        server.text_document_publish_diagnostics(
            lsp.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    handlers = OpenKoreHandlers(session, publish)

    # pygls tags each registered function, so register plain functions
    # rather than the bound handler methods

    @server.feature(lsp.INITIALIZE)
    def on_initialize(params: lsp.InitializeParams):
        handlers.initialize(params)

    @server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
    def did_open(params: lsp.DidOpenTextDocumentParams):
        handlers.did_open(params)

    @server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
    def did_change(params: lsp.DidChangeTextDocumentParams):
        handlers.did_change(params)

    @server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(params: lsp.DidCloseTextDocumentParams):
        handlers.did_close(params)

    @server.feature(
        lsp.TEXT_DOCUMENT_DIAGNOSTIC,
        lsp.DiagnosticOptions(inter_file_dependencies=False, workspace_diagnostics=False),
    )
    def pull_diagnostics(params: lsp.DocumentDiagnosticParams):
        return handlers.pull_diagnostics(params)

    @server.feature(lsp.TEXT_DOCUMENT_COMPLETION, lsp.CompletionOptions(resolve_provider=True))
    def completion(params: lsp.CompletionParams):
        return handlers.completion(params)

    @server.feature(lsp.COMPLETION_ITEM_RESOLVE)
    def completion_resolve(item: lsp.CompletionItem):
        return handlers.completion_resolve(item)

    @server.feature(lsp.TEXT_DOCUMENT_HOVER)
    def hover(params: lsp.HoverParams):
        return handlers.hover(params)

    @server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
    def definition(params: lsp.DefinitionParams):
        return handlers.definition(params)

    @server.feature(lsp.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
    def document_symbol(params: lsp.DocumentSymbolParams):
        return handlers.document_symbol(params)

    return server
