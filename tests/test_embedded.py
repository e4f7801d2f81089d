"""\
Tests for kt.hal.embedded.

"""

import unittest

import kt.hal.curies
import kt.hal.embedded
import kt.hal.interfaces
import kt.hal.link
import kt.hal.links
import kt.hal.representation
import tests.objects


HalRepresentation = kt.hal.representation.HalRepresentation
rel = tests.objects.rel


class EmbeddedTestCase(unittest.TestCase):

    def test_empty_embedded(self):
        embedded = kt.hal.embedded.empty_embedded()
        self.assertTrue(embedded.is_empty())
        self.assertEqual(embedded.get_items_by('foo'), [])
        self.assertEqual(embedded.get_items_by('foo', HalRepresentation), [])
        self.assertTrue(kt.hal.interfaces.IEmbedded.providedBy(embedded))

    def test_embedded(self):
        embedded = kt.hal.embedded.embedded('foo', [HalRepresentation()])
        self.assertEqual(len(embedded.get_items_by('foo')), 1)
        self.assertFalse(embedded.is_empty())

    def test_embedded_with_builder(self):
        embedded = kt.hal.embedded.embedded_builder() \
            .with_('foo', [HalRepresentation()]) \
            .with_('bar', [HalRepresentation()]) \
            .build()
        self.assertEqual(len(embedded.get_items_by('foo')), 1)
        self.assertEqual(len(embedded.get_items_by('bar')), 1)
        self.assertEqual(len(embedded.get_items_by('foobar')), 0)

    def test_add_rel_using_copy_of(self):
        original = kt.hal.embedded.embedded('foo', [HalRepresentation()])
        embedded = kt.hal.embedded.copy_of(original) \
            .with_('bar', [HalRepresentation()]) \
            .build()
        self.assertEqual(len(embedded.get_items_by('foo')), 1)
        self.assertEqual(len(embedded.get_items_by('bar')), 1)
        self.assertEqual(len(embedded.get_items_by('foobar')), 0)
        # The original is unchanged:
        self.assertEqual(original.get_rels(), ['foo'])

    def test_copy_of_none(self):
        builder = kt.hal.embedded.EmbeddedBuilder.copy_of(None)
        self.assertTrue(builder.build().is_empty())

    def test_items_as_type(self):
        embedded = kt.hal.embedded.embedded('foo', [
            tests.objects.ProductRepresentation(title='one'),
            HalRepresentation(),
            tests.objects.ProductRepresentation(title='two'),
        ])
        products = embedded.get_items_by(
            'foo', tests.objects.ProductRepresentation)
        self.assertEqual(len(products), 2)
        self.assertIsInstance(products[0], tests.objects.ProductRepresentation)
        self.assertEqual([p.title for p in products], ['one', 'two'])
        self.assertEqual(len(embedded.get_items_by('foo')), 3)

    def test_items_providing_interface(self):
        embedded = kt.hal.embedded.embedded('foo', [
            tests.objects.ProductRepresentation(title='plain'),
            tests.objects.FeaturedProductRepresentation(title='featured'),
        ])
        featured = embedded.get_items_by('foo', tests.objects.IFeatured)
        self.assertEqual([p.title for p in featured], ['featured'])

    def test_all_rels_in_order(self):
        embedded = kt.hal.embedded.embedded_builder() \
            .with_('foo', [HalRepresentation()]) \
            .with_('bar', [HalRepresentation()]) \
            .build()
        self.assertEqual(embedded.get_rels(), ['foo', 'bar'])

    def test_with_replaces_items(self):
        embedded = kt.hal.embedded.embedded_builder() \
            .with_('foo', [HalRepresentation()]) \
            .with_('bar', [HalRepresentation()]) \
            .build()
        replaced = embedded.with_('foo', [HalRepresentation(),
                                          HalRepresentation()])
        self.assertEqual(replaced.get_rels(), ['foo', 'bar'])
        self.assertEqual(len(replaced.get_items_by('foo')), 2)
        self.assertEqual(len(embedded.get_items_by('foo')), 1)

    def test_with_empty_items_removes_rel(self):
        embedded = kt.hal.embedded.embedded_builder() \
            .with_('foo', [HalRepresentation()]) \
            .with_('bar', [HalRepresentation()]) \
            .build()
        removed = embedded.with_('foo', [])
        self.assertEqual(removed.get_rels(), ['bar'])
        self.assertEqual(removed.get_items_by('foo'), [])

    def test_empty_items_not_stored(self):
        embedded = kt.hal.embedded.embedded('foo', [])
        self.assertTrue(embedded.is_empty())
        self.assertEqual(embedded.get_rels(), [])

    def test_replace_rels_with_curied_rels(self):
        embedded = kt.hal.embedded.embedded_builder() \
            .with_(rel('foo'), [HalRepresentation()]) \
            .with_(rel('bar'), [HalRepresentation()]) \
            .build()
        curied = embedded.using(tests.objects.curied_registry())
        self.assertEqual(curied.get_rels(), ['test:foo', 'test:bar'])
        self.assertEqual(embedded.get_rels(), [rel('foo'), rel('bar')])

    def test_replace_rels_with_curied_rels_using_builder(self):
        embedded = kt.hal.embedded.embedded_builder() \
            .with_(rel('foo'), [HalRepresentation()]) \
            .with_(rel('bar'), [HalRepresentation()]) \
            .using(tests.objects.curied_registry()) \
            .build()
        self.assertEqual(embedded.get_rels(), ['test:foo', 'test:bar'])

    def test_replace_nested_rels_with_curied_rels(self):
        inner = HalRepresentation(
            None,
            kt.hal.embedded.embedded_builder()
            .with_(rel('bar'), [HalRepresentation()])
            .build())
        embedded = kt.hal.embedded.embedded_builder() \
            .with_(rel('foo'), [inner]) \
            .using(tests.objects.curied_registry()) \
            .build()
        self.assertEqual(embedded.get_rels(), ['test:foo'])
        nested = embedded.get_items_by('test:foo')[0]
        self.assertEqual(nested.embedded().get_rels(), ['test:bar'])

    def test_replace_nested_link_rels_with_curied_link_rels(self):
        inner = HalRepresentation(kt.hal.links.linking_to(
            kt.hal.link.link(rel('bar'), 'http://example.com')))
        embedded = kt.hal.embedded.embedded_builder() \
            .with_(rel('foo'), [inner]) \
            .using(tests.objects.curied_registry()) \
            .build()
        nested = embedded.get_items_by('test:foo')[0]
        self.assertEqual(nested.links().get_rels(), ['test:bar'])

    def test_items_not_shared_between_containers(self):
        inner = HalRepresentation(kt.hal.links.linking_to(
            kt.hal.link.link(rel('bar'), 'http://example.com')))
        embedded = kt.hal.embedded.embedded(rel('foo'), [inner])
        curied = embedded.using(tests.objects.curied_registry())

        self.assertIs(embedded.get_items_by(rel('foo'))[0], inner)
        self.assertIsNot(curied.get_items_by('test:foo')[0], inner)
        self.assertEqual(inner.links().get_rels(), [rel('bar')])

    def test_lookup_by_full_or_curied_rel(self):
        embedded = kt.hal.embedded.embedded(
            rel('foo'), [HalRepresentation()]).using(
                tests.objects.curied_registry())
        self.assertEqual(len(embedded.get_items_by(rel('foo'))), 1)
        self.assertEqual(len(embedded.get_items_by('test:foo')), 1)

    def test_using_without_change_returns_same_instance(self):
        embedded = kt.hal.embedded.embedded('foo', [HalRepresentation()])
        self.assertIs(
            embedded.using(kt.hal.curies.default_rel_registry()), embedded)

    def test_using_combines_colliding_rels(self):
        first = tests.objects.ProductRepresentation(title='first')
        second = tests.objects.ProductRepresentation(title='second')
        third = tests.objects.ProductRepresentation(title='third')
        embedded = kt.hal.embedded.embedded_builder() \
            .with_('test:foo', [first]) \
            .with_('other', [third]) \
            .with_(rel('foo'), [second]) \
            .build()
        curied = embedded.using(tests.objects.curied_registry())
        self.assertEqual(curied.get_rels(), ['test:foo', 'other'])
        self.assertEqual(
            [item.title for item in curied.get_items_by('test:foo')],
            ['first', 'second'])

    def test_equality(self):
        one = kt.hal.embedded.embedded(
            'foo', [tests.objects.ProductRepresentation(title='x')])
        two = kt.hal.embedded.embedded(
            'foo', [tests.objects.ProductRepresentation(title='y')])
        # Attributes do not contribute to equality of representations.
        self.assertEqual(one, two)
        self.assertEqual(hash(one), hash(two))
        self.assertNotEqual(
            one, kt.hal.embedded.embedded('bar', [HalRepresentation()]))
