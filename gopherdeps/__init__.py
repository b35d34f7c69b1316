"""gopherdeps: build-tag aware Go import scanning and dependency resolution."""
