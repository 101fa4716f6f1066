from .miner import Miner, Worker
