from typing import Iterable


class AddressError(IndexError):
    address: int
    size: int
    pc: int | None

    def __init__(self, address: int, size: int, pc: int | None = None):
        super().__init__(f'Address {address} outside memory of {size} words')
        self.address = address
        self.size = size
        self.pc = pc


class Memory:
    ''' Mutable word store owned by a single CPU '''

    def __init__(self, words: Iterable[int]):
        self.words = list(words)

    def __len__(self) -> int:
        return len(self.words)

    def check(self, address: int):
        if address < 0 or address >= len(self.words):
            raise AddressError(address, len(self.words))

    def __getitem__(self, address: int) -> int:
        self.check(address)
        return self.words[address]

    def __setitem__(self, address: int, value: int):
        self.check(address)
        self.words[address] = value

    def dump(self) -> list[int]:
        return list(self.words)
