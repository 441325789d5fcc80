"""Project operations behind the depsync CLI commands.

Submodules:
    manage    -- Manifest edits through uv: add, add --dev, remove, upgrade one
                 package or everything, and printing the dependency tree.
                 Every edit ends with a hint to run `depsync sync`.
    check     -- Dependency health: `uv pip check` for conflicts plus an
                 out-of-sync comparison of a fresh production export
                 (post-processed like the sync step) against the committed
                 requirements.txt. Returns a CheckReport; never raises on
                 conflicts or drift.
    bootstrap -- Development environment setup: mise Python install, uv venv
                 creation, editable install with the dev extra, an initial
                 sync, and pre-commit hook installation (uv run, falling back
                 to mise exec). Every step after the manifest check degrades
                 to a warning.
"""
