from libellus import setupModule

config, logger = setupModule(__name__)
