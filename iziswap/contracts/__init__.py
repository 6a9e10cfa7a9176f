"""
Typed bindings for iZiSwap contracts.

Один класс на контракт, один метод на функцию контракта. Методы
возвращают web3 ContractFunction (encode / estimate_gas / transact).
"""
