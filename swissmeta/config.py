import configparser
import logging
import os

configfile = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.ini")
override_file = os.getenv("SWISSMETA_CONFIG")
override_logging = os.getenv("SWISSMETA_LOGGING")

config = configparser.ConfigParser()
config.read(configfile)
if override_file:
    config.read(override_file)

def defaultMinSample():
    return config.getint("defaults", "min-sample", fallback=6)

def defaultLabMinSample():
    return config.getint("defaults", "lab-min-sample", fallback=2)

def defaultLastN():
    return config.getint("defaults", "last-n", fallback=4)

def defaultTopSlices():
    return config.getint("defaults", "top-slices", fallback=8)

def defaultBase():
    base = config.get("archive", "base", fallback=".")
    if base == 'None' or base == '':
        return "."
    return base

def defaultRules():
    """Point values for new live tournaments, as a dict in the file format."""
    return {
        'winPoints': config.getint("tournament", "win-points", fallback=3),
        'drawPoints': config.getint("tournament", "draw-points", fallback=1),
        'lossPoints': config.getint("tournament", "loss-points", fallback=0)
    }

def getLogger(name):
    logging.basicConfig()
    logger = logging.getLogger(name)
    if config.has_option("defaults", "logging"):
        logger.setLevel(config["defaults"]["logging"])
    if override_logging:
        logger.setLevel(override_logging)
    return logger
