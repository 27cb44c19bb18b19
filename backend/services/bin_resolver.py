"""
Binary Resolver - Locate formatter executables on disk and memoize the result
"""

from __future__ import annotations

import os
import sys


class BinPathCache:
    """Resolve executable names to paths, caching each lookup"""

    def __init__(self, platform: str | None = None, env: dict[str, str] | None = None):
        self._platform = platform or sys.platform
        self._env = env
        self._cache: dict[str, str] = {}

    def candidates(self, binname: str) -> list[str]:
        """Names to try for binname on this platform"""
        if self._platform == "win32":
            return [f"{binname}.exe", f"{binname}.bat", f"{binname}.cmd", binname]
        return [binname]

    def resolve(self, binname: str) -> str:
        """Return the first existing candidate, searching PATH; fall back to binname"""
        if binname in self._cache:
            return self._cache[binname]

        env = self._env if self._env is not None else os.environ
        search_path = env.get("PATH", "")

        for candidate in self.candidates(binname):
            # Configured value may already be a usable path
            if os.path.exists(candidate):
                self._cache[binname] = candidate
                return candidate

            if search_path:
                for directory in search_path.split(os.pathsep):
                    bin_path = os.path.join(directory, candidate)
                    if os.path.exists(bin_path):
                        self._cache[binname] = bin_path
                        return bin_path

        # Spawning the bare name will most likely fail and be reported as not found
        self._cache[binname] = binname
        return binname

    def clear(self):
        """Forget all cached lookups"""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
