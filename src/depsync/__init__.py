"""depsync -- uv dependency management and pip-compatible production artifacts.

Core modules:
    config        -- Configuration via pydantic-settings (DEPSYNC_* env vars, .env).
                     Artifact paths are derived from an explicit project_root.
    cli           -- Click command group: add, add-dev, remove, update, sync, tree,
                     check, setup, help. CLI flags passed as kwargs to SyncConfig.
    runner        -- Sync orchestration: preconditions, scoped backup of the
                     previous requirements.txt, typed steps, aggregated SyncReport.
    resolver      -- uv subprocess wrappers (lock, export, tree, add/remove,
                     upgrade, pip check, venv, pip install). Raises
                     ExternalToolError on non-zero exit.
    runtime       -- mise subprocess wrappers (python install, where, exec).
    requirements  -- Requirements text processing: editable self-install
                     stripping, package name extraction, syntactic validator.
    artifacts     -- Atomic file writes and the requirements backup context manager.
    environment   -- Disposable uv venvs for dry-run install validation.
    preconditions -- Manifest and resolver checks run before anything is written.

Subpackages:
    steps -- Sync steps (lock, export-prod, export-dev, tree, validate, drift)
    ops   -- Command operations (manifest edits, health check, dev bootstrap)
"""
