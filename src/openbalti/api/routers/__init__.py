"""Route modules. Each exposes ``router`` and is picked up by register_all_routers."""
