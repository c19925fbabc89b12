import os


# Keep test runs independent of whatever SEQLIST_* values the developer has
# exported; individual tests override these through monkeypatch.
os.environ.setdefault("SEQLIST_LOG_LEVEL", "INFO")
os.environ.setdefault("SEQLIST_SHUFFLE_SEED", "1234")
