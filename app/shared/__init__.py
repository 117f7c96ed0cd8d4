"""Cross-cutting helpers (clock, ids, request context, telemetry). No task or message rules."""
