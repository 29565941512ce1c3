"""
Release-candidate tag check for GitHub release workflow.
"""

from __future__ import annotations

from rc_tag_gate.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
