"""protoc plugin I/O and descriptor reading."""
