"""
Value -> color ramp used to shade countries.

Low life expectancy skews red/orange, high skews blue.
"""
import logging

from core.config import DEFAULT_CONFIG
from core.errors import LoadError

logger = logging.getLogger(__name__)


def map_value_to_color(value, in_min, in_max, out_min, out_max):
    """Linearly re-map value from [in_min, in_max] to [out_min, out_max], truncated to int."""
    return int(out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min))


def ramp_color(value, config=DEFAULT_CONFIG):
    """Compose the (255 - level, 100, level) ramp color for a value."""
    in_min, in_max = config.value_domain
    out_min, out_max = config.level_range
    if config.clamp_ramp:
        value = min(max(value, in_min), in_max)
    level = map_value_to_color(value, in_min, in_max, out_min, out_max)
    return (255 - level, 100, level)


def shade_regions(regions, values, config=DEFAULT_CONFIG):
    """
    Assign each region its resting fill color. Runs once at startup.

    Regions without a value get the fallback gray. With `config.strict_join`
    an unmatched region is a LoadError instead.
    """
    unmatched = []
    for region in regions:
        value = values.get(region.id)
        if value is None:
            region.fill_color = config.fallback_color
            unmatched.append(region.id)
        else:
            region.fill_color = ramp_color(value, config)

    if unmatched and config.strict_join:
        raise LoadError(config.values_path, f"no value for regions: {', '.join(unmatched)}")
    if unmatched:
        logger.info("%d regions have no value and are drawn gray.", len(unmatched))
        logger.debug("Unmatched region ids: %s", unmatched)
    return unmatched
