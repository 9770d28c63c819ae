# The height of the framebuffer in pixels
FRAMEBUFFER_HEIGHT = 32

# The width of the framebuffer in pixels
FRAMEBUFFER_WIDTH = 64

# Every sprite row is one byte, so sprites are 8 pixels wide
SPRITE_WIDTH = 8


class Framebuffer(object):
    """
    The Chip 8 display memory. The original Chip 8 screen was 64 x 32 with 2
    colors, so every pixel is either on (True) or off (False). The coordinate
    system starts with (0, 0) being in the top left of the screen.

    The framebuffer knows nothing about how it is shown on the host. A display
    object reads it through get() or snapshot() when it is time to render.
    """
    def __init__(self, width=FRAMEBUFFER_WIDTH, height=FRAMEBUFFER_HEIGHT):
        """
        :param width: the width of the framebuffer in pixels
        :param height: the height of the framebuffer in pixels
        """
        self.width = width
        self.height = height
        self.pixels = [False] * (width * height)

    def __str__(self):
        rows = []
        for y_axis_position in range(self.height):
            row = self.pixels[y_axis_position * self.width:(y_axis_position + 1) * self.width]
            rows.append(''.join('#' if pixel else '.' for pixel in row))
        return '\n'.join(rows)

    def clear(self):
        """
        Turns off all the pixels.
        """
        self.pixels = [False] * (self.width * self.height)

    def get(self, x_axis_position, y_axis_position):
        """
        Returns whether the pixel is on or off at the specified location.

        :param x_axis_position: the x coordinate to check
        :param y_axis_position: the y coordinate to check
        :return: True if the pixel is on
        """
        if not (0 <= x_axis_position < self.width and 0 <= y_axis_position < self.height):
            raise IndexError("Pixel ({}, {}) is off the screen".format(
                x_axis_position, y_axis_position))
        return self.pixels[y_axis_position * self.width + x_axis_position]

    def draw(self, x_axis_position, y_axis_position, sprite):
        """
        Draws a sprite via an XOR routine, meaning that if the target pixel is
        already turned on, and a pixel is set to be turned on at that same
        location via the draw, then the pixel is turned off. Each byte of the
        sprite is one row, and bit 7 of each byte is the leftmost pixel. For
        example, the following 5 bytes draw an 'E':

                       bit 7 6 5 4 3 2 1 0

           byte 0          1 1 1 1 0 0 0 0
           byte 1          1 0 0 0 0 0 0 0
           byte 2          1 1 1 1 0 0 0 0
           byte 3          1 0 0 0 0 0 0 0
           byte 4          1 1 1 1 0 0 0 0

        Pixels that fall off an edge of the screen wrap around to the opposite
        edge, one pixel at a time.

        :param x_axis_position: the x coordinate of the top left of the sprite
        :param y_axis_position: the y coordinate of the top left of the sprite
        :param sprite: the bytes making up the sprite rows
        :return: True if any pixel was turned off by the draw
        """
        collision = False
        for y_index, sprite_row in enumerate(sprite):
            y_coord = (y_axis_position + y_index) % self.height

            for x_index in range(SPRITE_WIDTH):
                if not (sprite_row >> (SPRITE_WIDTH - 1 - x_index)) & 0x1:
                    continue

                x_coord = (x_axis_position + x_index) % self.width
                pixel = y_coord * self.width + x_coord
                if self.pixels[pixel]:
                    collision = True
                self.pixels[pixel] = not self.pixels[pixel]

        return collision

    def snapshot(self):
        """
        Returns a read-only copy of the framebuffer as a tuple of rows, each
        row being a tuple of booleans.
        """
        return tuple(
            tuple(self.pixels[y_axis_position * self.width:(y_axis_position + 1) * self.width])
            for y_axis_position in range(self.height))
