"""
Marketplace Command Agent

A rule-based assistant that turns free-form seller commands into marketplace
tasks, catalog guidance and performance briefings.
"""

__version__ = "1.0.0"
__author__ = "AI Agent Developer"
__description__ = "Marketplace Command Agent with rule-based intent routing"
