"""HTTP server supporting echo, user-agent, and file operations."""

from httpwire.cli import main

if __name__ == "__main__":
    main()
