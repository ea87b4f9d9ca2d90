"""Advisory compatibility check of resolved versions against the NuGet registry."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

import httpx
import structlog

from centralconfig.core.config import Settings
from centralconfig.engines.compatibility.models import CompatibilityCheckResult
from centralconfig.engines.package_analyzer.versioning import SemanticVersion, parse_semver

log = structlog.get_logger("centralconfig.engine")


class PackageNotFoundError(Exception):
    """Raised when the registry has no index for a package id."""


class VersionCompatibilityChecker:
    """Thin async client over the NuGet flat-container index.

    Only ``GET {base}/{id}/index.json`` is used; it lists every published
    version of a package.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._client = client or httpx.AsyncClient(timeout=self._settings.http_timeout)
        self._semaphore = asyncio.Semaphore(self._settings.http_concurrency)

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> VersionCompatibilityChecker:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch_versions(self, package_id: str) -> list[str]:
        """All published versions of *package_id*, as listed by the registry."""
        url = f"{self._settings.nuget_url}/{package_id.lower()}/index.json"
        async with self._semaphore:
            resp = await self._client.get(url)
        if resp.status_code == 404:
            raise PackageNotFoundError(package_id)
        resp.raise_for_status()
        payload = resp.json()
        versions = payload.get("versions") if isinstance(payload, dict) else None
        if not isinstance(versions, list):
            raise ValueError("unexpected registry response: no versions list")
        return [str(v) for v in versions]

    async def check(self, package_id: str, version: str) -> CompatibilityCheckResult:
        result = CompatibilityCheckResult(package_name=package_id, version=version)
        current = parse_semver(version)
        if current is None:
            result.is_compatible = False
            result.issues.append(f"Invalid version format: {version}")
            return result

        try:
            published = await self.fetch_versions(package_id)
        except PackageNotFoundError:
            published = []
        except (httpx.HTTPError, ValueError) as exc:
            log.warning("compatibility.fetch_failed", package=package_id, error=str(exc))
            result.issues.append(f"Failed to fetch package metadata: {exc}")
            return result

        if not published:
            result.is_compatible = False
            result.issues.append("Package not found in NuGet repository.")
            return result

        if current.is_prerelease:
            result.issues.append(
                "Pre-release version detected. Consider using a stable release for production."
            )

        latest = _latest_stable(published)
        if latest is not None:
            latest_text, latest_version = latest
            if current.release[0] < latest_version.release[0] - 1:
                result.issues.append(
                    f"This version is significantly outdated. Latest stable is {latest_text}."
                )
                result.suggested_version = latest_text
        return result

    async def check_all(self, packages: Mapping[str, str]) -> dict[str, CompatibilityCheckResult]:
        """Check every package concurrently; result keys keep the input order."""
        names = list(packages)
        results = await asyncio.gather(*(self.check(name, packages[name]) for name in names))
        return dict(zip(names, results))


def _latest_stable(published: list[str]) -> tuple[str, SemanticVersion] | None:
    stable = [
        (text, parsed)
        for text in published
        if (parsed := parse_semver(text)) is not None and not parsed.is_prerelease
    ]
    if not stable:
        return None
    return max(stable, key=lambda item: item[1].precedence)


async def check_compatibility(
    packages: Mapping[str, str],
    settings: Settings | None = None,
) -> dict[str, CompatibilityCheckResult]:
    """One-shot helper: open a checker, check *packages*, close it."""
    async with VersionCompatibilityChecker(settings) as checker:
        return await checker.check_all(packages)
