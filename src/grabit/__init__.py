"""
grabit core package.

This package currently provides:
- A device repository over the MySQL `devices` table (`grabit.devices`)
- Connection, error, and statement helpers (`grabit.database`)
- A minimal Typer-based CLI (`grabit.cli`)

Configuration:
- Shared, project-wide filesystem anchors live in `grabit.global_config`.
- Connection settings are injected through `grabit.database.config.DatabaseConfig`.
"""
