# ============================================================================
# TENANT ISOLATION SCANNER
# ============================================================================
# STATUS: Service - Static heuristic over API route handlers
# PURPOSE: Flag route handlers whose database access does not appear to be
#          scoped to a tenant namespace
# ============================================================================
"""
Tenant Isolation Scanner.

Walks the route handlers under a root directory and flags two patterns:

    direct_orm     the handler calls the ORM client (``prisma.``) without any
                   tenant-scoped query helper (safeQuerySchema / querySchema)
    unscoped_sql   the handler contains raw SELECT ... FROM text and never
                   mentions the tenant namespace prefix

Handlers whose relative path contains auth, health or master are exempt: they
legitimately read shared (non-tenant) data.

This is a text heuristic. A clean scan proves nothing at runtime, which is why
findings are reported apart from structural drift.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

from config.defaults import TenantDefaults
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "IsolationScanner")


ROUTE_FILENAMES = ("route.ts", "route.js")
PYTHON_SUFFIX = ".py"
EXEMPT_PATH_PARTS = ("auth", "health", "master")
TENANT_HELPERS = ("safeQuerySchema", "querySchema")
ORM_CALL = "prisma."

_RAW_SELECT = re.compile(r"\bSELECT\b[\s\S]*?\bFROM\b")

REASON_DIRECT_ORM = "direct_orm"
REASON_UNSCOPED_SQL = "unscoped_sql"

_REASON_TEXT = {
    REASON_DIRECT_ORM: "Uses direct ORM client without tenant schema isolation",
    REASON_UNSCOPED_SQL: "Contains SQL query that might not use the tenant schema",
}


@dataclass(frozen=True)
class IsolationFinding:
    """One flagged handler."""
    path: str
    reason: str

    @property
    def message(self) -> str:
        return _REASON_TEXT[self.reason]

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "reason": self.reason, "message": self.message}


@dataclass
class IsolationScanResult:
    """Outcome of one scan."""
    root: str
    root_exists: bool = True
    files_scanned: int = 0
    findings: List[IsolationFinding] = field(default_factory=list)
    unreadable: List[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.findings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "root_exists": self.root_exists,
            "files_scanned": self.files_scanned,
            "findings": [f.to_dict() for f in self.findings],
            "unreadable": list(self.unreadable),
        }


class IsolationScanner:
    """
    Scan route handlers under ``root``.

    Args:
        root: Directory holding the API route handlers
        namespace_prefix: Tenant namespace prefix expected in raw SQL
    """

    def __init__(self, root: str, namespace_prefix: str = TenantDefaults.NAMESPACE_PREFIX,
                 exempt_parts: Sequence[str] = EXEMPT_PATH_PARTS):
        self.root = Path(root)
        self.namespace_prefix = namespace_prefix
        self.exempt_parts = tuple(exempt_parts)

    def handler_files(self) -> List[Path]:
        return sorted(
            p for p in self.root.rglob("*")
            if p.is_file() and (p.name in ROUTE_FILENAMES or p.suffix == PYTHON_SUFFIX)
        )

    def is_exempt(self, relative_path: str) -> bool:
        return any(part in relative_path for part in self.exempt_parts)

    def check_source(self, relative_path: str, content: str) -> List[IsolationFinding]:
        """Findings for one handler's source text."""
        if self.is_exempt(relative_path):
            return []

        findings = []
        if ORM_CALL in content and not any(h in content for h in TENANT_HELPERS):
            findings.append(IsolationFinding(relative_path, REASON_DIRECT_ORM))
        if _RAW_SELECT.search(content) and self.namespace_prefix not in content:
            findings.append(IsolationFinding(relative_path, REASON_UNSCOPED_SQL))
        return findings

    def scan(self) -> IsolationScanResult:
        result = IsolationScanResult(root=str(self.root))

        if not self.root.is_dir():
            logger.warning(f"⚠️ Scan root {self.root} does not exist; isolation scan skipped")
            result.root_exists = False
            return result

        logger.info(f"🔍 Scanning route handlers under {self.root}")
        for path in self.handler_files():
            relative = path.relative_to(self.root).as_posix()
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"⚠️ Cannot read {relative}: {e}")
                result.unreadable.append(relative)
                continue
            result.files_scanned += 1
            result.findings.extend(self.check_source(relative, content))

        if result.findings:
            logger.warning(f"⚠️ {len(result.findings)} isolation finding(s) in {result.files_scanned} handler(s)")
        else:
            logger.info(f"✅ No isolation findings in {result.files_scanned} handler(s)")
        return result


__all__ = [
    'IsolationScanner',
    'IsolationScanResult',
    'IsolationFinding',
    'REASON_DIRECT_ORM',
    'REASON_UNSCOPED_SQL',
]
