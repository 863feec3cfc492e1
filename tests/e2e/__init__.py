"""
UI test package for the Task Manager.

This package contains Playwright-based browser tests and demonstrates:
- Page Object Model (POM) pattern
- Browser automation best practices
- Locator strategies using data-testid attributes
- User flow testing
"""
