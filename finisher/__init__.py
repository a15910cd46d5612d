"""
finisher package

This package implements finisher-v1: the last-mile tools for a documentation
template once it has been customized for a real project.

Key responsibilities are split across modules:
- `config.py`: typed configuration (term lists, exclusions, removal manifest) and YAML loading
- `scanner.py`: customization verifier (placeholders, sample-domain terms, `@docs/` references)
- `remover.py`: scaffold remover (placeholder guard, best-effort deletion)
- `report.py`: console report rendering
- `cli.py`: CLI entrypoint and exit status
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
