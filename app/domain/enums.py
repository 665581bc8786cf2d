# app/domain/enums.py
import enum


class CategoryType(enum.IntEnum):
    expense = 0
    income = 1
