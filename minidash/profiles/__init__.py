"""Profile listing for the dashboard."""

from minidash.profiles.registry import ProfileRegistry, normalize_profiles
from minidash.profiles.store import FileProfileStore, MinikubeCLIProfileStore, ProfileStore, minikube_home

__all__ = [
    "FileProfileStore",
    "MinikubeCLIProfileStore",
    "ProfileRegistry",
    "ProfileStore",
    "minikube_home",
    "normalize_profiles",
]
