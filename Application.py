import sys

import pygame
import pygame_gui

from FPT.config import config
from FPT.debug.debug_manager import DebugManager, Debug, set_debug
from FPT.functions.smooth_noise import SmoothNoise, smoothstep
from FPT.gui.draw_surface import PygameDrawSurface
from FPT.modules.input_handler import POINTER_BUTTONS, InteractionController
from FPT.modules.plot_set import PlotSet
from FPT.modules.profiler import profile_context
from FPT.modules.renderer import Renderer
from FPT.modules.view_transform import ViewTransform


class Application:
    def __init__(self, config_path=None):
        config.reload(config_path or config.app.config_default_path)
        self.debug_manager = DebugManager()
        set_debug(self.debug_manager)
        pygame.init()
        try:
            self.screen = self.setup_screen()
        except pygame.error:
            Debug.log_exception("Failed to create the plotter window", "Init")
            raise
        pygame.display.set_caption(config.app.version)
        self.clock = pygame.time.Clock()
        self.running = True
        self.needs_repaint = True

        self.view = ViewTransform(*self.screen.get_size())
        self.plots = PlotSet(on_change=self.request_repaint)
        self.input_handler = InteractionController(self.view, self.plots, request_repaint=self.request_repaint)
        self.renderer = Renderer(self.view, self.plots, self.input_handler.cursor)
        self.surface = PygameDrawSurface(self.screen, antialias=config.render.antialias)
        Debug.log("Plot panel initialized successfully", "Init")

        self.ui_manager = pygame_gui.UIManager(self.screen.get_size())
        self.buttons = {}
        self._create_buttons()
        Debug.log("UIManager initialized successfully", "Init")

        self.add_demo_plot()
        Debug.log_info(f"Display: {pygame.display.Info()}", "Init")
        Debug.log("Application initialized successfully", "Application")

    def setup_screen(self):
        return pygame.display.set_mode((config.app.screen_width, config.app.screen_height), pygame.RESIZABLE)

    def _create_buttons(self):
        btn_defs = {
            "clear_plots": "Clear Plots",
            "add_noise": "Add Noise Function",
        }
        for i, (key, txt) in enumerate(btn_defs.items()):
            self.buttons[key] = pygame_gui.elements.UIButton(
                relative_rect=pygame.Rect(self._button_position(i), (config.app.button_width, config.app.button_height)),
                text=txt,
                manager=self.ui_manager
            )

    def _button_position(self, index):
        a = config.app
        x = self.screen.get_width() - a.button_margin - a.button_width
        y = a.button_margin + index * (a.button_height + a.button_margin)
        return x, y

    def _layout(self):
        self.ui_manager.set_window_resolution(self.screen.get_size())
        for i, button in enumerate(self.buttons.values()):
            button.set_relative_position(self._button_position(i))

    def add_demo_plot(self):
        r0, r1 = config.app.demo_curve
        self.plots.add(lambda x: r0 + smoothstep(x) * (r1 - r0))

    def request_repaint(self):
        self.needs_repaint = True

    def process_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
            return
        if event.type == pygame_gui.UI_BUTTON_PRESSED:
            if event.ui_element == self.buttons["clear_plots"]:
                self.plots.clear()
            elif event.ui_element == self.buttons["add_noise"]:
                self.plots.add(SmoothNoise())
        if self.ui_manager.process_events(event):
            if event.type == pygame.MOUSEBUTTONDOWN and event.button in POINTER_BUTTONS:
                self.input_handler.capture_pointer()
            elif event.type == pygame.MOUSEBUTTONUP:
                self.input_handler.release_pointer()
            self.request_repaint()
            return
        if event.type in (pygame.VIDEORESIZE, pygame.WINDOWSIZECHANGED):
            self.screen = pygame.display.get_surface()
            self.surface.surface = self.screen
            self._layout()
        self.input_handler.handle_event(event)

    def run(self):
        while self.running:
            time_delta = self.clock.tick(config.app.clock_tickrate) / 1000.0
            self.debug_manager.next_frame()
            self.plots.flush_pending()
            for event in pygame.event.get():
                self.process_event(event)
            self.ui_manager.update(time_delta)
            if self.needs_repaint:
                self.draw()
        Debug.log_info(f"Rendered {Debug.get_stat('frames')} frames", "Application")
        pygame.quit()

    def draw(self):
        with profile_context("frame", "app"):
            self.needs_repaint = False
            self.surface.fill(config.app.background_color)
            self.renderer.draw(self.surface)
            self.ui_manager.draw_ui(self.screen)
            pygame.display.flip()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        app = Application(config_path=argv[0] if argv else None)
        app.run()
    except Exception as e:
        Debug.log_exception(f"Application error: {e}", "Application")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
