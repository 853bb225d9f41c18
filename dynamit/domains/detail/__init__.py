"""Item detail tree domain."""
