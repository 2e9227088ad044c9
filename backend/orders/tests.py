"""
Test suite for cart, checkout and orders
Tests: cart merging, checkout validation, inventory decrement, price snapshots, cancellation, admin status updates
"""
from decimal import Decimal
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from backend.core.models import AuditLog
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.orders.models import Cart, CartItem, Order
from backend.orders.utils import CheckoutError, checkout_cart

SHIPPING = {
    'shipping_address': '1 Diamond Row',
    'shipping_city': 'New York',
    'shipping_state': 'NY',
    'shipping_zip': '10036',
    'shipping_country': 'USA',
    'payment_method': 'card',
}


class CartModelTests(TestCase):

    def test_subtotal_and_count(self):
        user = TestDataFactory.create_user()
        cart = Cart.objects.create(user=user)
        CartItem.objects.create(cart=cart, gemstone=TestDataFactory.create_gemstone(price=Decimal('100.00')), quantity=2)
        CartItem.objects.create(cart=cart, gemstone=TestDataFactory.create_gemstone(price=Decimal('49.50')), quantity=1)
        self.assertEqual(cart.get_subtotal(), Decimal('249.50'))
        self.assertEqual(cart.get_item_count(), 3)

    def test_empty_cart_subtotal(self):
        cart = Cart.objects.create(user=TestDataFactory.create_user())
        self.assertEqual(cart.get_subtotal(), Decimal('0.00'))


class CartAPITests(TestCase):

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.gemstone = TestDataFactory.create_gemstone(price=Decimal('100.00'), inventory=5)

    def test_empty_cart_created_on_get(self):
        response = self.client.get('/api/cart/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['items'], [])
        self.assertEqual(response.data['subtotal'], '0.00')

    def test_add_and_merge(self):
        response = self.client.post('/api/cart/items/', {'gemstone_id': self.gemstone.id, 'quantity': 1})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.post('/api/cart/items/', {'gemstone_id': self.gemstone.id, 'quantity': 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['quantity'], 3)

        cart = self.client.get('/api/cart/')
        self.assertEqual(len(cart.data['items']), 1)
        self.assertEqual(cart.data['subtotal'], '300.00')
        self.assertEqual(cart.data['item_count'], 3)

    def test_add_unavailable_gemstone(self):
        self.gemstone.is_available = False
        self.gemstone.save()
        response = self.client.post('/api/cart/items/', {'gemstone_id': self.gemstone.id})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_add_invalid_quantity(self):
        response = self.client.post('/api/cart/items/', {'gemstone_id': self.gemstone.id, 'quantity': 0})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_add_unknown_gemstone(self):
        response = self.client.post('/api/cart/items/', {'gemstone_id': 999999})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_and_remove_item(self):
        added = self.client.post('/api/cart/items/', {'gemstone_id': self.gemstone.id})
        item_id = added.data['id']
        response = self.client.patch(f'/api/cart/items/{item_id}/', {'quantity': 4})
        self.assertEqual(response.data['quantity'], 4)
        self.assertEqual(response.data['line_total'], '400.00')
        response = self.client.delete(f'/api/cart/items/{item_id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_other_users_item(self):
        other_cart = Cart.objects.create(user=TestDataFactory.create_user())
        item = CartItem.objects.create(cart=other_cart, gemstone=self.gemstone)
        response = self.client.patch(f'/api/cart/items/{item.id}/', {'quantity': 2})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_clear_cart(self):
        self.client.post('/api/cart/items/', {'gemstone_id': self.gemstone.id})
        response = self.client.delete('/api/cart/')
        self.assertEqual(response.data['items'], [])


class CheckoutTests(TestCase):

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.ruby = TestDataFactory.create_gemstone(name='Ruby', price=Decimal('100.00'), inventory=5)
        self.emerald = TestDataFactory.create_gemstone(name='Emerald', price=Decimal('250.00'), inventory=1)

    def fill_cart(self, *lines):
        cart = Cart.objects.create(user=self.user)
        for gemstone, quantity in lines:
            CartItem.objects.create(cart=cart, gemstone=gemstone, quantity=quantity)
        return cart

    def test_checkout_creates_order(self):
        self.fill_cart((self.ruby, 2), (self.emerald, 1))
        response = self.client.post('/api/orders/', SHIPPING)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['total_amount'], '450.00')
        self.assertEqual(len(response.data['items']), 2)
        self.assertTrue(response.data['order_number'].startswith('ORD-'))

        self.ruby.refresh_from_db()
        self.emerald.refresh_from_db()
        self.assertEqual(self.ruby.inventory, 3)
        self.assertEqual(self.emerald.inventory, 0)
        self.assertFalse(self.emerald.is_available)
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 0)
        self.assertTrue(AuditLog.objects.filter(action='order_create').exists())

    def test_checkout_alias(self):
        self.fill_cart((self.ruby, 1))
        response = self.client.post('/api/checkout/', SHIPPING)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_empty_cart(self):
        response = self.client.post('/api/orders/', SHIPPING)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Cart is empty')

    def test_missing_shipping_fields(self):
        self.fill_cart((self.ruby, 1))
        response = self.client.post('/api/orders/', {'payment_method': 'card'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('shipping_address', response.data)

    def test_insufficient_stock_rolls_back(self):
        self.fill_cart((self.ruby, 1), (self.emerald, 2))
        response = self.client.post('/api/orders/', SHIPPING)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only 1 of Emerald in stock')
        self.ruby.refresh_from_db()
        self.assertEqual(self.ruby.inventory, 5)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 2)

    def test_unavailable_gemstone(self):
        self.fill_cart((self.ruby, 1))
        self.ruby.is_available = False
        self.ruby.save()
        with self.assertRaises(CheckoutError):
            checkout_cart(self.user, SHIPPING)

    def test_price_snapshot(self):
        self.fill_cart((self.ruby, 1))
        order = checkout_cart(self.user, SHIPPING)
        self.ruby.price = Decimal('999.00')
        self.ruby.save()
        response = self.client.get(f'/api/orders/{order.id}/')
        self.assertEqual(response.data['items'][0]['price'], '100.00')
        self.assertEqual(response.data['total_amount'], '100.00')


class OrderManagementTests(TestCase):

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.gemstone = TestDataFactory.create_gemstone(price=Decimal('100.00'), inventory=2)
        cart = Cart.objects.create(user=self.user)
        CartItem.objects.create(cart=cart, gemstone=self.gemstone, quantity=2)
        self.order = checkout_cart(self.user, SHIPPING)

    def test_list_own_orders(self):
        Order.objects.create(user=TestDataFactory.create_user(), total_amount=Decimal('1.00'), **SHIPPING)
        response = self.client.get('/api/orders/')
        self.assertEqual([o['id'] for o in response.data], [self.order.id])

    def test_other_user_cannot_view(self):
        other_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user())
        response = other_client.get(f'/api/orders/{self.order.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_cancel_restores_inventory(self):
        self.gemstone.refresh_from_db()
        self.assertFalse(self.gemstone.is_available)

        response = self.client.post(f'/api/orders/{self.order.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'cancelled')
        self.gemstone.refresh_from_db()
        self.assertEqual(self.gemstone.inventory, 2)
        self.assertTrue(self.gemstone.is_available)

        response = self.client.post(f'/api/orders/{self.order.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cannot_cancel_shipped(self):
        self.order.status = 'shipped'
        self.order.save()
        response = self.client.post(f'/api/orders/{self.order.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_updates_status(self):
        admin_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        response = admin_client.patch(f'/api/admin/orders/{self.order.id}/', {'status': 'shipped'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'shipped')
        log = AuditLog.objects.get(action='order_status')
        self.assertEqual(log.changes, {'status': {'old': 'pending', 'new': 'shipped'}})

        response = admin_client.patch(f'/api/admin/orders/{self.order.id}/', {'status': 'lost'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = admin_client.get('/api/admin/orders/', {'status': 'shipped'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['user']['id'], self.user.id)

    def test_cancelled_order_cannot_be_reopened(self):
        admin_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        response = admin_client.patch(f'/api/admin/orders/{self.order.id}/', {'status': 'cancelled'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.gemstone.refresh_from_db()
        self.assertEqual(self.gemstone.inventory, 2)

        for new_status in ['shipped', 'pending']:
            response = admin_client.patch(f'/api/admin/orders/{self.order.id}/', {'status': new_status})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'cancelled')
        self.gemstone.refresh_from_db()
        self.assertEqual(self.gemstone.inventory, 2)

    def test_user_cancel_after_admin_cancel_restores_once(self):
        admin_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        admin_client.patch(f'/api/admin/orders/{self.order.id}/', {'status': 'cancelled'})
        response = self.client.post(f'/api/orders/{self.order.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.gemstone.refresh_from_db()
        self.assertEqual(self.gemstone.inventory, 2)

    def test_cancel_keeps_stone_off_sale_when_admin_withdrew_it(self):
        gemstone = TestDataFactory.create_gemstone(price=Decimal('50.00'), inventory=3)
        cart = Cart.objects.get(user=self.user)
        CartItem.objects.create(cart=cart, gemstone=gemstone, quantity=1)
        order = checkout_cart(self.user, SHIPPING)
        gemstone.refresh_from_db()
        gemstone.is_available = False
        gemstone.save()

        response = self.client.post(f'/api/orders/{order.id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        gemstone.refresh_from_db()
        self.assertEqual(gemstone.inventory, 3)
        self.assertFalse(gemstone.is_available)

    def test_admin_endpoints_forbidden_for_users(self):
        response = self.client.get('/api/admin/orders/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
