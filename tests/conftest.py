"""Dummy Jenkins credentials so utils.jenkins_api imports without a .env file."""

import os

os.environ.setdefault("JENKINS_URL", "http://jenkins.test")
os.environ.setdefault("JENKINS_USER", "tester")
os.environ.setdefault("JENKINS_TOKEN", "dummy-token")
os.environ.setdefault("TOOL_DELAY_SECONDS", "0")
