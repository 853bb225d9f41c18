"""UI-agnostic explorer core: modes, messages, key routing and state base."""
