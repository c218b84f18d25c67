"""resume-render: résumé and cover-letter document rendering engine."""

__version__ = "0.1.0"
