"""Entry point de desarrollo sin instalar el paquete.

Uso:
- `python main.py endpoints`
- `python -m main call tenancy_contacts_list -p limit=5`

El código vive en `src/`, así que hay que añadirlo a `sys.path` antes de
importar `cli`, `core` o `adapters`.
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(_SRC) not in sys.path:
        sys.path.insert(0, str(_SRC))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
