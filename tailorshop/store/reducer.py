"""Pure state transition function."""
from tailorshop.models import AppState
from tailorshop.store import actions as a


def _append(items: tuple, record) -> tuple:
    return items + (record,)


def _replace_by_id(items: tuple, record) -> tuple:
    return tuple(record if item.id == record.id else item for item in items)


def _add_garment_type(state: AppState, action: a.AddGarmentType) -> AppState:
    name = action.payload.name.lower()
    if any(gt.name.lower() == name for gt in state.garment_types):
        return state
    return state.model_copy(update={'garment_types': _append(state.garment_types, action.payload)})


def _restore_state(state: AppState, action: a.RestoreState) -> AppState:
    snapshot = action.payload
    return state.model_copy(update={
        'customers': snapshot.customers,
        'measurements': snapshot.measurements,
        'orders': snapshot.orders,
        'garment_types': snapshot.garment_types,
        'employees': snapshot.employees or (),
        'shop_info': snapshot.shop_info,
    })


_HANDLERS = {
    a.SetLanguage: lambda s, act: s.model_copy(update={'language': act.payload}),
    a.SetTheme: lambda s, act: s.model_copy(update={'theme': act.payload}),
    a.AddCustomer: lambda s, act: s.model_copy(update={'customers': _append(s.customers, act.payload)}),
    a.UpdateCustomer: lambda s, act: s.model_copy(update={'customers': _replace_by_id(s.customers, act.payload)}),
    # Newest order first
    a.AddOrder: lambda s, act: s.model_copy(update={'orders': (act.payload,) + s.orders}),
    a.UpdateOrder: lambda s, act: s.model_copy(update={'orders': _replace_by_id(s.orders, act.payload)}),
    a.AddMeasurement: lambda s, act: s.model_copy(update={'measurements': _append(s.measurements, act.payload)}),
    a.UpdateMeasurement: lambda s, act: s.model_copy(update={'measurements': _replace_by_id(s.measurements, act.payload)}),
    a.AddGarmentType: _add_garment_type,
    a.AddEmployee: lambda s, act: s.model_copy(update={'employees': _append(s.employees, act.payload)}),
    a.UpdateEmployee: lambda s, act: s.model_copy(update={'employees': _replace_by_id(s.employees, act.payload)}),
    a.UpdateShopInfo: lambda s, act: s.model_copy(update={'shop_info': act.payload}),
    a.Login: lambda s, act: s.model_copy(update={'is_authenticated': True}),
    a.Logout: lambda s, act: s.model_copy(update={'is_authenticated': False}),
    a.RestoreState: _restore_state,
}


def transition(state: AppState, action) -> AppState:
    """
    Map (state, action) to the next state.

    Never mutates ``state`` and never raises: an object that is not one of
    the known action variants leaves the state unchanged.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)
