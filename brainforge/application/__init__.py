"""Application layer: use case orchestration on top of the boundary layer."""
