"""Collaborator interfaces: image service and host base renderer."""
