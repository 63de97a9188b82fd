LATEST_VERSION = "latest"
