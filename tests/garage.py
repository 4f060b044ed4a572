from abc import ABC, abstractmethod
from typing import Annotated, Optional


class Fuel:
    pass


class Engine:
    def __init__(self, fuel: Fuel, cylinders: int = 4):
        self.fuel = fuel
        self.cylinders = cylinders


class Car:
    def __init__(self, engine: Engine, colour: str = "red"):
        self.engine = engine
        self.colour = colour


class Logger:
    def __init__(self):
        self.lines = []

    def log(self, line):
        self.lines.append(line)


class LoggerAware(ABC):
    logger = None
    times_logger_set = 0

    @abstractmethod
    def set_logger(self, logger: Logger):
        pass


class Mailer(LoggerAware):
    def set_logger(self, logger: Logger):
        self.logger = logger
        self.times_logger_set += 1


class Notifier(LoggerAware):
    def __init__(self, mailer: Mailer):
        self.mailer = mailer

    def set_logger(self, logger: Logger):
        self.logger = logger
        self.times_logger_set += 1


class Chicken:
    def __init__(self, egg: "Egg"):
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken):
        self.chicken = chicken


class Greeter:
    def __init__(self, name: str):
        self.name = name


class Garage:
    def __init__(self, car: Car, greeter: Greeter):
        self.car = car
        self.greeter = greeter


class Mechanic:
    def __init__(self, logger: Annotated[Logger, "log"], spare: Optional[Engine] = None):
        self.logger = logger
        self.spare = spare


class Handler:
    def __call__(self, logger: Logger, name: str = "world") -> Greeter:
        logger.log(f"hello {name}")
        return Greeter(name)


class Workshop:
    opened = 0

    def __init__(self, logger: Logger):
        self.logger = logger

    @staticmethod
    def build_engine(fuel: Fuel) -> Engine:
        return Engine(fuel, cylinders=12)

    @classmethod
    def open(cls, *, logger: Logger) -> "Workshop":
        cls.opened += 1
        return cls(logger)

    def service(self, car: Car, note: str = "serviced") -> str:
        self.logger.log(note)
        return note


def make_v8(fuel: Fuel) -> Engine:
    return Engine(fuel, cylinders=8)


def path_of(cls) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
