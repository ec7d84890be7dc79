"""Image building: the per-function executor and the concurrent dispatcher."""
