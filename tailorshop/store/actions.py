"""
Actions accepted by the state store.

The action set is closed: one pydantic model per kind, discriminated by its
``type`` literal. ``parse_action`` turns a raw mapping (for example a JSON
request body) into the matching variant.
"""
from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from tailorshop.models import (
    Customer, DataSnapshot, DomainModel, Employee, GarmentTypeDefinition,
    Language, Measurement, Order, ShopInfo, Theme,
)


class SetLanguage(DomainModel):
    type: Literal['SET_LANGUAGE'] = 'SET_LANGUAGE'
    payload: Language


class SetTheme(DomainModel):
    type: Literal['SET_THEME'] = 'SET_THEME'
    payload: Theme


class AddCustomer(DomainModel):
    type: Literal['ADD_CUSTOMER'] = 'ADD_CUSTOMER'
    payload: Customer


class UpdateCustomer(DomainModel):
    type: Literal['UPDATE_CUSTOMER'] = 'UPDATE_CUSTOMER'
    payload: Customer


class AddOrder(DomainModel):
    type: Literal['ADD_ORDER'] = 'ADD_ORDER'
    payload: Order


class UpdateOrder(DomainModel):
    type: Literal['UPDATE_ORDER'] = 'UPDATE_ORDER'
    payload: Order


class AddMeasurement(DomainModel):
    type: Literal['ADD_MEASUREMENT'] = 'ADD_MEASUREMENT'
    payload: Measurement


class UpdateMeasurement(DomainModel):
    type: Literal['UPDATE_MEASUREMENT'] = 'UPDATE_MEASUREMENT'
    payload: Measurement


class AddGarmentType(DomainModel):
    type: Literal['ADD_GARMENT_TYPE'] = 'ADD_GARMENT_TYPE'
    payload: GarmentTypeDefinition


class AddEmployee(DomainModel):
    type: Literal['ADD_EMPLOYEE'] = 'ADD_EMPLOYEE'
    payload: Employee


class UpdateEmployee(DomainModel):
    type: Literal['UPDATE_EMPLOYEE'] = 'UPDATE_EMPLOYEE'
    payload: Employee


class UpdateShopInfo(DomainModel):
    type: Literal['UPDATE_SHOP_INFO'] = 'UPDATE_SHOP_INFO'
    payload: ShopInfo


class Login(DomainModel):
    type: Literal['LOGIN'] = 'LOGIN'


class Logout(DomainModel):
    type: Literal['LOGOUT'] = 'LOGOUT'


class RestoreState(DomainModel):
    type: Literal['RESTORE_STATE'] = 'RESTORE_STATE'
    payload: DataSnapshot


Action = Annotated[
    Union[
        SetLanguage, SetTheme,
        AddCustomer, UpdateCustomer,
        AddOrder, UpdateOrder,
        AddMeasurement, UpdateMeasurement,
        AddGarmentType,
        AddEmployee, UpdateEmployee,
        UpdateShopInfo,
        Login, Logout,
        RestoreState,
    ],
    Field(discriminator='type'),
]

_action_adapter = TypeAdapter(Action)


def parse_action(raw: dict) -> Action:
    """Validate a raw action mapping. Raises pydantic.ValidationError."""
    return _action_adapter.validate_python(raw)
