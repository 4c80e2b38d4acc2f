"""Cluster-state bridge between the job scheduling model and Kubernetes nodes and pods."""

__version__ = "0.1.0"
