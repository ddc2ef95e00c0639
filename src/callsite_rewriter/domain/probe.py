"""Type environment probe: does a fully-qualified symbol resolve in this compilation unit?"""

import logging
import re

from callsite_rewriter.domain.protocols import SymbolResolver

_QUALIFIED_NAME = re.compile(r"[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*")


def is_well_formed(qualified_name: object) -> bool:
    """True for dotted identifier paths such as ``com.google.common.primitives.Ints``."""
    return isinstance(qualified_name, str) and bool(_QUALIFIED_NAME.fullmatch(qualified_name))


def resolves(resolver: SymbolResolver, qualified_name: object) -> bool:
    """
    Ask the resolver about a symbol without ever raising.

    Malformed names and resolver failures both answer False. Nothing is
    cached here: two compilation units may get different answers.
    """
    if not is_well_formed(qualified_name):
        return False
    try:
        return bool(resolver.is_resolvable(str(qualified_name)))
    except Exception:  # any failure means unresolvable
        logging.debug("Symbol resolver failed for %r", qualified_name, exc_info=True)
        return False
