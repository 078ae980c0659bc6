"""Lock-file parsers — auto-registered on import.

Import order sets the auto-detection priority: Gopkg.lock wins over glide.lock.
"""

from osstp.lockfile.parsers import (
    gopkg_lock,  # noqa: F401
    glide_lock,  # noqa: F401
)
