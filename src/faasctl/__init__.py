"""faasctl - build, push and deploy functions to a FaaS gateway."""

__version__ = "0.4.0"
