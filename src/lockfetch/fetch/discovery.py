"""
go-import meta tag discovery for vanity import paths.

A request to ``https://<import path>?go-get=1`` returns an HTML page whose
head carries ``<meta name="go-import" content="prefix vcs repo-root">``.
See https://golang.org/cmd/go/#hdr-Remote_import_paths .
"""

import logging
from html.parser import HTMLParser
from typing import List, NamedTuple

from ..errors import DiscoveryError
from ..settings import Settings
from .http import http_get
from .sources import GITHUB_PATTERN

logger = logging.getLogger(__name__)


class MetaImport(NamedTuple):
    """
    The three values of a go-import meta tag.

        - prefix: import path prefix the repo is rooted at
        - vcs: version-control system of the repo
        - repo_root: URL of the repo
    """

    prefix: str
    vcs: str
    repo_root: str


class _MetaImportParser(HTMLParser):
    """
    Collects go-import tags from the head of an HTML document.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.imports: List[MetaImport] = []
        self.done = False

    def handle_starttag(self, tag, attrs):
        if self.done:
            return
        if tag == "body":
            self.done = True
            return
        if tag != "meta":
            return

        attributes = {name: value or "" for name, value in attrs}
        name = attributes.get("name", "")
        content = attributes.get("content", "")

        # A go-source tag pointing at github lets us use the tarball API
        if name == "go-source" and len(self.imports) == 1:
            match = GITHUB_PATTERN.search(content)
            if match is not None:
                self.imports = [
                    MetaImport(self.imports[0].prefix, "git", match.group(0))
                ]
                return

        if name != "go-import":
            return

        fields = content.split()
        if len(fields) == 3:
            self.imports.append(MetaImport(*fields))

    def handle_endtag(self, tag):
        if tag == "head":
            self.done = True


def parse_meta_imports(document: str) -> List[MetaImport]:
    """
    Return the go-import tags found before the end of ``<head>``.

    Parsing stops at ``</head>`` or ``<body>``; tags whose content does not
    have exactly three fields are ignored.
    """
    parser = _MetaImportParser()
    parser.feed(document)
    parser.close()
    return parser.imports


class MetaImportDiscoverer:
    """
    Resolves an import path to a single :class:`MetaImport` over HTTPS.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def discover(self, import_path: str) -> MetaImport:
        """
        Fetch and parse the go-import metadata for ``import_path``.

        Raises:
            NetworkError: If the request fails.
            DiscoveryError: If the page does not carry exactly one go-import.
        """
        url = "https://" + import_path.split("://", 1)[-1]
        response = http_get(
            url, params={"go-get": "1"}, timeout=self.settings.request_timeout
        )
        document = response.content.decode("utf-8", errors="replace")
        return select_meta_import(import_path, parse_meta_imports(document))


def select_meta_import(
    import_path: str, imports: List[MetaImport]
) -> MetaImport:
    if not imports:
        raise DiscoveryError(f"No go-import meta tags found for {import_path}")
    if len(imports) > 1:
        found = "; ".join(" ".join(i) for i in imports)
        raise DiscoveryError(
            f"Too many imports for {import_path}: {found}", candidates=imports
        )
    logger.debug(f"Discovered {imports[0]} for {import_path}")
    return imports[0]
