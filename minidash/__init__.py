"""minidash - live terminal dashboard for local minikube profiles."""

__version__ = "0.1.0"
