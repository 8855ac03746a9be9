"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import threading
from datetime import date

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from tray_icon import create_tray, tray_title


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cal_win = CalendarWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def on_print() -> None:
        cal_win.root.after(0, cal_win.print_year)

    def on_settings() -> None:
        cal_win.root.after(0, cal_win.open_settings)

    tray = create_tray(create_icon_image(cal_win.config), cal_win.config,
                       on_show, on_exit,
                       on_print=on_print, on_settings=on_settings)

    # Week start or quarter scheme changes alter the icon's week number and colour
    def on_config_change() -> None:
        tray.icon = create_icon_image(cal_win.config)
        tray.title = tray_title(cal_win.config, date.today())

    cal_win.on_config_change = on_config_change

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
