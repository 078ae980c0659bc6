"""Manual license assignments for dependencies whose vendored tree defeats detection."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from osstp.license.identify import LICENSE_APACHE_20, LICENSE_ISC, LICENSE_MIT

OVERRIDES: Mapping[str, str] = MappingProxyType(
    {
        "github.com/davecgh/go-spew": LICENSE_ISC,
        "github.com/davecgh/go-xdr": LICENSE_ISC,
        "github.com/howeyc/gopass": LICENSE_ISC,
        "github.com/vmware/govmomi": LICENSE_APACHE_20,
        "github.com/pelletier/go-buffruneio": LICENSE_MIT,
    }
)
