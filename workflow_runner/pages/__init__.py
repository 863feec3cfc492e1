"""
Page Object Model (POM) classes for the tracker UI.

Page objects encapsulate locators and interactions so scenarios read as
user workflows rather than selector plumbing.
"""

from workflow_runner.pages.base_page import BasePage
from workflow_runner.pages.entity_list_page import EntityListPage

__all__ = ["BasePage", "EntityListPage"]
