from __future__ import annotations

from scenekit.cli import main

if __name__ == "__main__":
    main()
