"""Product catalog domain model.

Products, product groups, their persistence and the runtime services
(configuration, logging, database sessions) around them.
"""

__version__ = "0.1.0"
