from __future__ import annotations

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="verdict-tests-")

os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP_DIR, "verdict.log"))
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
