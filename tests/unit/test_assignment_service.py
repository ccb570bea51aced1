"""
Unit tests for the work assignment reconciler.
"""
from decimal import Decimal

import pytest

from tailorshop.exceptions import AssignmentValidationError, BusinessLogicError, NotFoundError
from tailorshop.models import LineItem, OrderStatus, WorkAssignment
from tailorshop.services import assignment_service, order_service
from tailorshop.services.assignment_service import AssignmentGroup


def _item(quantity=5, assignments=None):
    if assignments is None:
        assignments = tuple(assignment_service.unassigned_unit('I1', n) for n in range(1, quantity + 1))
    return LineItem(id='I1', garment_type='Shirt', quantity=quantity, unit_price=Decimal('500'), assignments=assignments)


class TestExpandGroups:
    """Tests for turning editing rows into per-unit assignments."""

    def test_expand_fills_with_unassigned(self):
        item = _item(5)
        groups = [
            AssignmentGroup(employee_id='E1', quantity=3, payment=Decimal('50')),
            AssignmentGroup(employee_id='E2', quantity=1, payment=Decimal('40')),
        ]

        assignments = assignment_service.expand_groups(item, groups)

        assert len(assignments) == 5
        assert [a.id for a in assignments] == ['I1-E1-0', 'I1-E1-1', 'I1-E1-2', 'I1-E2-0', 'I1-unassigned-0']
        assert [a.employee_id for a in assignments] == ['E1', 'E1', 'E1', 'E2', None]
        assert assignments[-1].payment == 0

    def test_round_trip_preserves_groups(self):
        """Expanding and grouping again gives the same rows."""
        item = _item(5)
        groups = [
            AssignmentGroup(employee_id='E1', quantity=3, payment=Decimal('50')),
            AssignmentGroup(employee_id='E2', quantity=1, payment=Decimal('40')),
        ]
        expanded = item.model_copy(update={'assignments': assignment_service.expand_groups(item, groups)})

        regrouped = assignment_service.group_assignments(expanded)

        assert regrouped == groups
        assert expanded.labor_cost == Decimal('190')

    def test_over_assignment_rejected(self):
        item = _item(5)
        groups = [
            AssignmentGroup(employee_id='E1', quantity=4, payment=Decimal('50')),
            AssignmentGroup(employee_id='E2', quantity=2, payment=Decimal('40')),
        ]

        with pytest.raises(AssignmentValidationError) as exc:
            assignment_service.expand_groups(item, groups)

        assert exc.value.assigned == 6
        assert exc.value.quantity == 5
        assert exc.value.status_code == 400

    def test_negative_values_rejected(self):
        item = _item(2)
        with pytest.raises(BusinessLogicError):
            assignment_service.expand_groups(item, [AssignmentGroup(employee_id='E1', quantity=-1)])
        with pytest.raises(BusinessLogicError):
            assignment_service.expand_groups(item, [AssignmentGroup(employee_id='E1', quantity=1, payment=Decimal('-5'))])

    def test_rows_without_employee_or_units_are_skipped(self):
        item = _item(3)
        groups = [
            AssignmentGroup(employee_id=None, quantity=2, payment=Decimal('10')),
            AssignmentGroup(employee_id='E1', quantity=0, payment=Decimal('10')),
        ]

        assignments = assignment_service.expand_groups(item, groups)

        assert len(assignments) == 3
        assert all(a.employee_id is None for a in assignments)


class TestGroupAssignments:
    """Tests for grouping per-unit assignments into rows."""

    def test_unassigned_units_are_excluded(self):
        assert assignment_service.group_assignments(_item(4)) == []

    def test_divergent_rates_are_kept_apart(self):
        """Units of one employee at different rates stay in separate rows."""
        item = _item(3, assignments=(
            WorkAssignment(id='a', employee_id='E1', payment=Decimal('50')),
            WorkAssignment(id='b', employee_id='E1', payment=Decimal('60')),
            WorkAssignment(id='c', employee_id='E1', payment=Decimal('50')),
        ))

        groups = assignment_service.group_assignments(item)

        assert groups == [
            AssignmentGroup(employee_id='E1', quantity=2, payment=Decimal('50')),
            AssignmentGroup(employee_id='E1', quantity=1, payment=Decimal('60')),
        ]

    def test_summary_counts(self):
        item = _item(3, assignments=(
            WorkAssignment(id='a', employee_id='E1', payment=Decimal('50')),
            WorkAssignment(id='b'),
            WorkAssignment(id='c'),
        ))
        summary = assignment_service.assignment_summary(item)
        assert summary == {'total': 3, 'assigned': 1, 'unassigned': 2, 'labor_cost': Decimal('50')}


class TestResizeAssignments:

    def test_grow_pads_with_unassigned(self):
        kept = (WorkAssignment(id='x', employee_id='E1', payment=Decimal('50')),)
        resized = assignment_service.resize_assignments('I1', kept, 3)
        assert [a.id for a in resized] == ['x', 'I1-A2', 'I1-A3']

    def test_shrink_keeps_first_units(self):
        units = tuple(WorkAssignment(id=str(n)) for n in range(4))
        assert [a.id for a in assignment_service.resize_assignments('I1', units, 2)] == ['0', '1']


class TestSaveItemAssignments:
    """Tests for saving rows into an order."""

    def test_save_updates_order_in_store(self, store, order, employee):
        item = order.items[0]
        groups = [AssignmentGroup(employee_id=employee.id, quantity=2, payment=Decimal('80'))]

        updated = assignment_service.save_item_assignments(store, order.id, item.id, groups)

        saved = store.state.find_order(order.id)
        assert saved == updated
        assert len(saved.items[0].assignments) == item.quantity
        assert sum(1 for a in saved.items[0].assignments if a.employee_id == employee.id) == 2
        # Other items untouched
        assert saved.items[1] == order.items[1]

    def test_rejected_save_leaves_state_untouched(self, store, order, employee):
        before = store.state
        groups = [AssignmentGroup(employee_id=employee.id, quantity=99, payment=Decimal('80'))]

        with pytest.raises(AssignmentValidationError):
            assignment_service.save_item_assignments(store, order.id, order.items[0].id, groups)

        assert store.state is before

    def test_unknown_employee_rejected(self, store, order):
        groups = [AssignmentGroup(employee_id='E-NOPE', quantity=1, payment=Decimal('80'))]
        with pytest.raises(BusinessLogicError):
            assignment_service.save_item_assignments(store, order.id, order.items[0].id, groups)

    def test_closed_order_cannot_be_edited(self, store, order, employee):
        order_service.change_status(store, order.id, OrderStatus.COMPLETED)
        groups = [AssignmentGroup(employee_id=employee.id, quantity=1, payment=Decimal('80'))]

        with pytest.raises(BusinessLogicError):
            assignment_service.save_item_assignments(store, order.id, order.items[0].id, groups)

    def test_unknown_item(self, store, order):
        with pytest.raises(NotFoundError):
            assignment_service.save_item_assignments(store, order.id, 'NOPE', [])

    def test_remove_group(self, store, order, employee, second_employee):
        item = order.items[0]
        assignment_service.save_item_assignments(store, order.id, item.id, [
            AssignmentGroup(employee_id=employee.id, quantity=2, payment=Decimal('80')),
            AssignmentGroup(employee_id=second_employee.id, quantity=1, payment=Decimal('60')),
        ])

        updated = assignment_service.remove_group(store, order.id, item.id, 0)

        groups = assignment_service.group_assignments(updated.items[0])
        assert groups == [AssignmentGroup(employee_id=second_employee.id, quantity=1, payment=Decimal('60'))]
        assert len(updated.items[0].assignments) == item.quantity
