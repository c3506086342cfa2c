"""Точка входа настольного приложения."""
import logging

from sizefit.app import SizeFitApp


def main() -> None:
    """Настраивает лог, создаёт и запускает главное окно приложения."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = SizeFitApp()
    app.mainloop()


if __name__ == "__main__":
    main()
