pytest_plugins = ["receiptcheck.plugin"]
