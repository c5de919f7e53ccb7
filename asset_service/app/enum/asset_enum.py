from enum import Enum


class PrintStatus(str, Enum):

    not_printed = "not_printed"
    printed = "printed"
