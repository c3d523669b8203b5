"""Display-free model, orbit evaluation and per-frame simulation for the orrery."""
