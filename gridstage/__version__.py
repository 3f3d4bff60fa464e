__title__ = "gridstage"
__description__ = "Stage job data between a local filesystem and a storage grid"
__url__ = "https://github.com/cyverse-de/gridstage"
__version__ = "1.4.0"
__license__ = "BSD-3-Clause"
