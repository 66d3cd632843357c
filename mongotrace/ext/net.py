"""
Standard network tags.
"""

HOST_NAME = "net.host.name"
HOST_PORT = "net.host.port"
