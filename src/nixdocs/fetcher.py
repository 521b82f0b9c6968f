"""Resolve option documentation files by building them with nix-build."""

import logging
import os
import subprocess
from pathlib import Path

from nixdocs.config import Settings
from nixdocs.errors import BuildFailedError, FetchError, MissingEnvironmentError
from nixdocs.models import BackendVariant

logger = logging.getLogger(__name__)

NIXOS_OPTIONS_EXPR = """
let
  pkgs = import <nixpkgs> { };
  eval = import <nixpkgs/nixos/lib/eval-config.nix> { modules = [ ]; };
  doc = pkgs.nixosOptionsDoc { options = eval.options; };
in
pkgs.runCommand "nixos-options.json" { } ''
  cp ${doc.optionsJSON}/share/doc/nixos/options.json $out
''
"""

NIX_DARWIN_OPTIONS_EXPR = """
let
  pkgs = import <nixpkgs> { };
  darwin = import <darwin/release.nix> { nixpkgs = <nixpkgs>; };
in
pkgs.runCommand "darwin-options.json" { } ''
  cp ${darwin.optionsJSON}/share/doc/darwin/options.json $out
''
"""

HOME_MANAGER_OPTIONS_EXPR = """
let
  pkgs = import <nixpkgs> { };
  docs = import <home-manager/docs> { inherit pkgs; };
in
docs.options.json
"""

HOME_MANAGER_OPTIONS_SUBPATH = Path("share/doc/home-manager/options.json")

_PERMISSIVE_ENV = {
    "NIXPKGS_ALLOW_UNFREE": "1",
    "NIXPKGS_ALLOW_BROKEN": "1",
    "NIXPKGS_ALLOW_INSECURE": "1",
}


class NixBuildFetcher:
    """Builds the options JSON for a backend variant and returns its path.

    Instances are callable so they can be handed to ``OptionsDatabase`` as a
    resolver.
    """

    EXPRESSIONS = {
        BackendVariant.NIXOS: NIXOS_OPTIONS_EXPR,
        BackendVariant.NIX_DARWIN: NIX_DARWIN_OPTIONS_EXPR,
        BackendVariant.HOME_MANAGER: HOME_MANAGER_OPTIONS_EXPR,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialise fetcher.

        Args:
            settings: Runtime settings; defaults are read from the environment.
        """
        self.settings = settings or Settings.from_env()

    def __call__(self, variant: BackendVariant) -> Path:
        return self.resolve(variant)

    def resolve(self, variant: BackendVariant) -> Path:
        """Return the path of the options JSON file for ``variant``.

        Args:
            variant: Backend whose documentation is wanted.

        Returns:
            Path to an existing options JSON file.

        Raises:
            FetchError: If the build fails and no fallback is available.
            MissingEnvironmentError: If ``HOME`` is needed but not set.
        """
        if variant is BackendVariant.HOME_MANAGER:
            return self._resolve_home_manager()
        return self._build(variant)

    def _resolve_home_manager(self) -> Path:
        try:
            return self._build(BackendVariant.HOME_MANAGER) / HOME_MANAGER_OPTIONS_SUBPATH
        except BuildFailedError:
            # manual.json.enable installs the same file into the user profile
            home = os.environ.get("HOME")
            if home is None:
                raise MissingEnvironmentError("HOME") from None

            profile_path = Path(home) / ".nix-profile" / HOME_MANAGER_OPTIONS_SUBPATH
            if profile_path.exists():
                logger.warning("nix-build failed, using Home Manager options from %s", profile_path)
                return profile_path
            raise

    def _build(self, variant: BackendVariant) -> Path:
        """Run nix-build for ``variant`` and return the printed store path.

        Args:
            variant: Backend to build documentation for.

        Returns:
            Store path printed by nix-build.
        """
        cmd = [self.settings.nix_build, "--no-out-link", "-E", self.EXPRESSIONS[variant]]
        env = {**os.environ, **self._env_overrides(variant)}

        logger.info("Building %s option documentation...", variant.value)
        try:
            result = subprocess.run(cmd, capture_output=True, env=env, check=False)  # noqa: S603
        except OSError as exc:
            msg = f"Failed to launch {self.settings.nix_build}: {exc}"
            raise FetchError(msg) from exc

        stderr = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0:
            msg = f"nix-build for {variant.value} exited with status {result.returncode}"
            raise BuildFailedError(msg, stderr)

        try:
            output = result.stdout.decode("utf-8").rstrip("\n")
        except UnicodeDecodeError as exc:
            msg = f"nix-build for {variant.value} printed a non UTF-8 path"
            raise FetchError(msg, stderr) from exc
        if not output:
            msg = f"nix-build for {variant.value} printed no output path"
            raise FetchError(msg, stderr)

        logger.debug("nix-build produced %s", output)
        return Path(output)

    @staticmethod
    def _env_overrides(variant: BackendVariant) -> dict[str, str]:
        overrides = dict(_PERMISSIVE_ENV)
        if variant is BackendVariant.NIX_DARWIN:
            overrides["NIXPKGS_ALLOW_UNSUPPORTED_SYSTEM"] = "1"
        return overrides
