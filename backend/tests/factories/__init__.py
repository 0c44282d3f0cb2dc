# Repository mock factories
