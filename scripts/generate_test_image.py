"""
Generate a synthetic test image and convert it to text art.
Smoke test for the full pipeline without needing a real photo.
"""

import numpy as np
from PIL import Image, ImageDraw

from textify import ProcessingOptions, generate, get_palette


def create_synthetic_image(width=600, height=400):
    """Create a synthetic image with shapes, a gradient and a transparent hole."""
    img = np.zeros((height, width, 4), dtype=np.uint8)

    # Horizontal black-to-white gradient
    ramp = np.linspace(0, 255, width, dtype=np.uint8)
    img[:, :, 0] = ramp
    img[:, :, 1] = ramp
    img[:, :, 2] = ramp
    img[:, :, 3] = 255

    pil_img = Image.fromarray(img)
    draw = ImageDraw.Draw(pil_img)

    draw.ellipse((50, 50, 200, 200), fill="white", outline="black")
    draw.rectangle((250, 50, 350, 150), fill="black")
    draw.polygon([(450, 50), (400, 150), (500, 150)], fill="red")

    # Fully transparent square: should render as the lightest glyph
    draw.rectangle((250, 250, 350, 350), fill=(0, 0, 0, 0))

    return pil_img


def main():
    print("Generating synthetic test image...")
    image = create_synthetic_image()
    image.save("test_input.png")
    print("Saved 'test_input.png'")

    for preset in ("standard", "blocks"):
        art = generate(image, get_palette(preset), ProcessingOptions(target_width=80))
        print(f"\n--- {preset} ({art.width}x{art.height}) ---")
        print(art)

    art.save("test_output.txt")
    print("\nSaved 'test_output.txt'")


if __name__ == "__main__":
    main()
