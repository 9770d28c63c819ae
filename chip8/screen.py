from pygame import display, DOUBLEBUF, Color, draw

SCREEN_NAME = 'CHIP8 Emulator'

# The default number of host pixels drawn for every Chip 8 pixel
DEFAULT_SCALE = 10

# The depth of the screen is the number of bits used to represent the color
# of a pixel.
SCREEN_DEPTH = 8

# The colors of the pixels to draw. The Chip 8 supports two colors: 0 (off)
# and 1 (on). The format of the colors is in RGBA format.
PIXEL_COLORS = {
    0: Color(0, 0, 0, 255),
    1: Color(250, 250, 250, 255)
}


class Screen(object):
    """
    A pygame window that shows a Chip 8 framebuffer. Every Chip 8 pixel is
    drawn as a square of ratio x ratio host pixels, colored with color 0
    (off) or color 1 (on).
    """
    def __init__(self, screen_width, screen_height, ratio=DEFAULT_SCALE):
        """
        The scale factor is used to modify the size of the main screen,
        since the original resolution of the Chip 8 was 64 x 32, which is
        quite small.

        :param screen_width: the width of the framebuffer being shown
        :param screen_height: the height of the framebuffer being shown
        :param ratio: the scaling factor to apply to the screen
        """
        self.screen_height = screen_height
        self.screen_width = screen_width
        self.scaling_ratio = ratio
        self.screen_surface = None

    def init_display(self):
        """
        Attempts to initialize a screen with the specified height and width.
        The screen will by default be of depth SCREEN_DEPTH, and will be
        double-buffered (if possible).
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((self.screen_width * self.scaling_ratio),
             (self.screen_height * self.scaling_ratio)),
            DOUBLEBUF,
            SCREEN_DEPTH)
        display.set_caption(SCREEN_NAME)
        self.screen_surface.fill(PIXEL_COLORS[0])
        display.flip()

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        """
        Turn a pixel on or off at the specified location on the screen. Note
        that the pixel will not automatically be drawn on the screen, you
        must call update_screen() to flip the drawing buffer to the display.

        :param x_axis_position: the x coordinate to place the pixel
        :param y_axis_position: the y coordinate to place the pixel
        :param pixel_color: the color of the pixel to draw
        """
        x_axis_base_position = x_axis_position * self.scaling_ratio
        y_axis_base_position = y_axis_position * self.scaling_ratio
        draw.rect(self.screen_surface,
                  PIXEL_COLORS[pixel_color],
                  (x_axis_base_position, y_axis_base_position, self.scaling_ratio, self.scaling_ratio))

    def clear_screen(self):
        """
        Turns off all the pixels on the screen (writes color 0 to all pixels).
        """
        self.screen_surface.fill(PIXEL_COLORS[0])

    def flush(self, framebuffer):
        """
        Redraw the whole window from the framebuffer and show it.

        :param framebuffer: the Framebuffer to display
        """
        self.clear_screen()
        for y_axis_position, row in enumerate(framebuffer.snapshot()):
            for x_axis_position, pixel in enumerate(row):
                if pixel:
                    self.draw_screen_pixel(x_axis_position, y_axis_position, 1)
        self.update_screen()

    @staticmethod
    def update_screen():
        """
        Updates the display by swapping the back buffer and screen buffer.
        """
        display.flip()
