"""kubesnap: fetch-once, scope-filtered inventory of Kubernetes cluster resources."""

__version__ = "0.1.0"
