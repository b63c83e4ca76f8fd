"""cosmos2xlsx - export Azure Cosmos DB containers to XLSX workbooks."""

__version__ = "1.0.0"
