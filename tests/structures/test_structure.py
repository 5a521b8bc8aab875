import io

from uncrush import Structure, BytesField, IntegerField, CheckError, ImpossibleToCalculateLengthError
from tests import UncrushTestCase


class StructureDefaultTest(UncrushTestCase):
    def test_default(self):
        class TestStructure(Structure):
            field0 = BytesField(5, default=b"abcde")
            field1 = BytesField(5)

        self.assertEqual(b"abcde", TestStructure().field0)
        self.assertEqual(None, TestStructure().field1)
        self.assertEqual(b"12345", TestStructure(field0=b"12345").field0)

    def test_unknown_field(self):
        class TestStructure(Structure):
            field0 = BytesField(5)

        with self.assertRaises(TypeError):
            TestStructure(field1=b"abcde")


class StructureParsingTest(UncrushTestCase):
    def test_consumed(self):
        class TestStructure(Structure):
            length = IntegerField(1)
            data = BytesField(length='length')

        stream = io.BytesIO(b"\x03abcdef")
        structure, consumed = TestStructure.from_stream(stream)

        self.assertEqual(4, consumed)
        self.assertEqual(3, structure.length)
        self.assertEqual(b"abc", structure.data)
        self.assertEqual(b"def", stream.read())

    def test_written(self):
        class TestStructure(Structure):
            length = IntegerField(1)
            data = BytesField(length='length')

        stream = io.BytesIO()
        self.assertEqual(4, TestStructure(data=b"abc").to_stream(stream))
        self.assertEqual(b"\x03abc", stream.getvalue())

    def test_from_memoryview(self):
        class TestStructure(Structure):
            x = IntegerField(2, "big")

        self.assertEqual(0x0102, TestStructure.from_bytes(memoryview(b"\x00\x01\x02")[1:]).x)


class ChecksTest(UncrushTestCase):
    def test_checks_work(self):
        class TestStructure(Structure):
            field1 = BytesField(5)
            field2 = BytesField(5)

            class Meta:
                checks = [
                    lambda f: f.field1 == f.field2
                ]

        with self.assertRaises(CheckError):
            TestStructure.from_bytes(b"abcde12345")
        TestStructure.from_bytes(b"abcdeabcde")

        with self.assertRaises(CheckError):
            TestStructure(field1=b"abcde", field2=b"12345").to_bytes()


class MetaTest(UncrushTestCase):
    def test_invalid_meta(self):
        with self.assertRaises(TypeError):
            class TestStructure(Structure):
                class Meta:
                    foo = 1

    def test_meta_is_not_kept(self):
        class TestStructure(Structure):
            class Meta:
                byte_order = "big"

        self.assertFalse(hasattr(TestStructure, "Meta"))
        self.assertEqual("big", TestStructure._meta.byte_order)


class LengthTest(UncrushTestCase):
    def test_length_empty_structure(self):
        class TestStructure(Structure):
            pass

        self.assertEqual(0, len(TestStructure))

    def test_length_sum(self):
        class TestStructure(Structure):
            x = IntegerField(4, "big")
            y = BytesField(3)

        self.assertEqual(7, len(TestStructure))

    def test_length_dependent(self):
        class TestStructure(Structure):
            length = IntegerField(1)
            data = BytesField(length='length')

        with self.assertRaises(ImpossibleToCalculateLengthError):
            len(TestStructure)


class EqualityTest(UncrushTestCase):
    def test_equality(self):
        class TestStructure(Structure):
            x = IntegerField(1)

        class OtherStructure(Structure):
            x = IntegerField(1)

        self.assertEqual(TestStructure(x=1), TestStructure(x=1))
        self.assertNotEqual(TestStructure(x=1), TestStructure(x=2))
        self.assertNotEqual(TestStructure(x=1), OtherStructure(x=1))
        self.assertEqual("<TestStructure: x=1>", repr(TestStructure(x=1)))
