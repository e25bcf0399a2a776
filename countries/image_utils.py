from PIL import Image, ImageDraw, ImageFont
from django.conf import settings
from loguru import logger
import os


def summary_image_path():
    return str(settings.SUMMARY_IMAGE_PATH)


def generate_summary_image(total_countries, top_countries, last_refreshed_at, path=None):
    """Generates a simple PNG summary of current country stats.

    ``top_countries`` is a sequence of objects with ``name`` and
    ``estimated_gdp``, already ordered.
    """
    path = path or summary_image_path()

    img = Image.new('RGB', (800, 600), color='white')
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    draw.rectangle((10, 10, 790, 590), outline=(211, 211, 211), width=2)

    y = 50
    draw.text((50, y), "Country Currency Summary", fill=(0, 0, 139), font=font)
    y += 40
    draw.text((50, y), f"Total Countries: {total_countries}", fill=(0, 0, 0), font=font)

    y += 60
    draw.text((50, y), "Top 5 Countries by Estimated GDP:", fill=(47, 79, 79), font=font)
    y += 30

    if not top_countries:
        draw.text((70, y), "No GDP data available.", fill=(128, 128, 128), font=font)
    for i, c in enumerate(top_countries, 1):
        gdp = f"${float(c.estimated_gdp):,.2f}" if c.estimated_gdp is not None else "N/A"
        draw.text((70, y), f"{i}. {c.name}: {gdp}", fill=(0, 0, 0), font=font)
        y += 30

    stamp = last_refreshed_at.strftime('%Y-%m-%d %H:%M:%S') + " UTC" if last_refreshed_at else "N/A"
    draw.text((50, 550), f"Last Refreshed: {stamp}", fill=(128, 128, 128), font=font)

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    img.save(path, 'PNG')
    logger.info(f"Summary image written to {path}")
    return path
